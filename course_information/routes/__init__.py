# Routes package init
"""
Course Information Service — API Routes Package
=================================================

Route Inventory:
    - course_information.py:  GET /api/courseInformation/...  (catalog lookups)
    - health.py:              GET /health                     (service health check)

Routes stay thin: check parameters, call the injected service, let the global
exception handlers pick the status code.
"""
