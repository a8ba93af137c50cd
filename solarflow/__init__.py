"""
SolarFlow - solar installation business management backend
"""
__version__ = "1.0.0"
