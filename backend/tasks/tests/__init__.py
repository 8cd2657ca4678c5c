# tasks/tests/__init__.py
"""
Task App Test Suite
===================

Modules:
--------
- helpers: Record builders and an in-memory repository stand-in
- test_engine: Scoring rules, tier mapping, ranking and apply planning
- test_orchestration: Orchestrator, cache stores, repository and Celery task
- test_api: REST endpoints for tasks and prioritization

Running Tests:
--------------
    # Run all task tests
    python manage.py test tasks

    # Or through pytest-django from the repository root
    pytest backend/tasks
"""
