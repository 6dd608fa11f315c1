# Routes package init
"""
ITR API: Route Handlers Package
===============================

Route Inventory:
    - employees.py:  POST   /v1/create
                     GET    /v1/find/{employee_id}
                     PUT    /v1/update/{employee_id}   (PATCH accepted, same semantics)
                     DELETE /v1/delete/{employee_id}
                     GET    /v1/findall
    - health.py:     GET    /health

Handlers stay thin: decode the request, call the record store, shape the
response. Error-to-status mapping lives in main.register_exception_handlers.
"""
