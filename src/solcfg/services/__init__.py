"""Service layer: resolution and activation orchestration.

All CLI-facing operations return ServiceResult.
"""
