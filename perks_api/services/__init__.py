# Services package init
"""
Perks API — Services Layer
===========================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PerkValidator: Field rules for create and partial update payloads
    - PerkService:   Guards, validation and one store call per operation

Routes handle HTTP; services handle rules. Services are unit-tested
against an in-memory database without going through HTTP.
"""
