"""HR Portal package.

Organized by feature modules (departments, employees, payroll, ...) on top of
a small client core: the API client, the session store, the route guard and
the shared domain-store pattern. The Flask layer is a thin front end over it.
"""
