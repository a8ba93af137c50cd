# API v1 Package
from solarflow.api.v1 import auth, dashboard, clients, approvals, tasks, inventory, stock_requests, invoices, users

__all__ = [
    'auth',
    'dashboard',
    'clients',
    'approvals',
    'tasks',
    'inventory',
    'stock_requests',
    'invoices',
    'users',
]
