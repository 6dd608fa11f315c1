# Services package init
"""
ITR API: Services Layer
=======================

Service Inventory:
    - EmployeeStore: the record store owning the `employees` table
      (create, find_by_id, find_all, update, delete)

Services receive the request's database session as an argument and keep
no per-instance state, so each is exposed as a module-level singleton.
"""
