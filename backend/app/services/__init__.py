# Services package init
"""
Daybook Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services accept the request's AsyncSession and the caller's identity,
       apply validation and ownership rules, and return ORM records. Routes
       turn those records into response schemas.

Service Inventory:
    - ResourceService (store.py): generic create/get/list/update/delete
    - NoteService, TaskService, EventService: one per resource, each setting
      its model, validator and list ordering
"""
