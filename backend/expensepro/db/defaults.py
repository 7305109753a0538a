# expensepro/db/defaults.py
# Records seeded into a collection the first time a schema version introduces it.

DEFAULT_USERS = [
    {
        "username": "admin",
        "password": "admin123",
        "role": "Admin",
        "full_name": "System Administrator",
        "email": "admin@expensepro.com",
        "department": "Administration",
    },
    {
        "username": "user",
        "password": "user123",
        "role": "User",
        "full_name": "Regular User",
        "email": "user@expensepro.com",
        "department": "Operations",
    },
]

DEFAULT_SETTINGS = {
    "expenseCodes": ["Travel", "Food", "Accommodation", "Transport", "Office Supplies", "Equipment", "Training", "Marketing"],
    "costCenters": ["Head Office", "Branch Office", "Sales", "Marketing", "IT", "HR", "Operations", "Finance"],
    "tallyLedgers": ["Cash", "Bank", "Petty Cash", "Credit Card", "Accounts Payable", "Accounts Receivable"],
    "approvers": ["Admin", "Finance Manager", "Department Head"],
    "departments": ["Administration", "Finance", "IT", "Sales", "Marketing", "Operations", "HR"],
    "currency": "₹",
    "taxRate": 18,
}

DEFAULT_CATEGORIES = [
    {"id": 1, "name": "Income", "type": "income", "color": "#10b981", "icon": "fa-money-bill-wave"},
    {"id": 2, "name": "Expense", "type": "expense", "color": "#ef4444", "icon": "fa-shopping-cart"},
    {"id": 3, "name": "Salary", "type": "income", "parent_id": 1, "color": "#3b82f6", "icon": "fa-briefcase"},
    {"id": 4, "name": "Freelance", "type": "income", "parent_id": 1, "color": "#8b5cf6", "icon": "fa-laptop-code"},
    {"id": 5, "name": "Travel", "type": "expense", "parent_id": 2, "color": "#f59e0b", "icon": "fa-plane"},
    {"id": 6, "name": "Food", "type": "expense", "parent_id": 2, "color": "#ec4899", "icon": "fa-utensils"},
    {"id": 7, "name": "Rent", "type": "expense", "parent_id": 2, "color": "#6366f1", "icon": "fa-home"},
    {"id": 8, "name": "Utilities", "type": "expense", "parent_id": 2, "color": "#14b8a6", "icon": "fa-bolt"},
]
