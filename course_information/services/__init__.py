# Services package init
"""
Course Information Service — Services Layer
=============================================

What:  The catalog lookup contract and its implementations.

Service Inventory:
    - CourseInformationService (abstract): one async lookup per endpoint
    - JsonCatalogService: implementation over an extracted catalog snapshot
"""
