"""
repositories/ - Data Access Layer
==================================
All SQL for the ``cards`` table lives here. Repositories take domain
objects in and hand CardPerformance objects back.
"""
