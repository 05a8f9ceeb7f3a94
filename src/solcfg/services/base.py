"""BaseService: foundation for solcfg services.

Every service receives a :class:`Project` at construction time. The
Project provides the settings, filesystem, plugin registry, and a
resolver bound to the project root.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solcfg.infrastructure.project import Project


class BaseService:
    """Base for service-layer classes.

    Usage::

        class BuildService(BaseService):
            def resolve(self) -> ServiceResult:
                resolver = self._project.resolver()
                ...
    """

    def __init__(self, project: Project) -> None:
        self._project = project
