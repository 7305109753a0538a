# expensepro.api.v1 package - exports the router modules mounted by expensepro.main
from . import admin, analytics, auth, categories, files, health, logs, settings, transactions, users  # noqa: F401
