"""
Dependency names for the external native build lifecycle tasks.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

TaskNamesProvider = Callable[[], Sequence[str]]
TaskNames = Union[Sequence[str], TaskNamesProvider]


def _check_names(field_name: str, names: Sequence[str]) -> None:
    if isinstance(names, str):
        raise TypeError(f"{field_name} must be a list of task names, not a string")
    if not names:
        raise ValueError(f"{field_name} must not be empty; use None for no edge")


@dataclass(frozen=True)
class TaskDependencySpec:
    """
    Backend task names the lifecycle tasks are wired against.

    Each field is either ``None`` (no edge), a non-empty list of task names,
    or a zero-argument callable returning one. Callables are resolved when
    the edges are wired, after the project is fully configured.

    Attributes:
        pre_depends: Tasks that must run after ``preExternalNativeBuild``
        post_depends: Tasks ``postExternalNativeBuild`` runs after
        clean_depends: Tasks ``externalNativeBuildClean`` runs after
    """

    pre_depends: Optional[TaskNames] = None
    post_depends: Optional[TaskNames] = None
    clean_depends: Optional[TaskNames] = None

    def __post_init__(self):
        for field_name in ("pre_depends", "post_depends", "clean_depends"):
            value = getattr(self, field_name)
            if value is None or callable(value):
                continue
            _check_names(field_name, value)
            object.__setattr__(self, field_name, tuple(value))

    @staticmethod
    def _resolve(field_name: str, value: Optional[TaskNames]) -> Optional[List[str]]:
        if value is None:
            return None
        names = value() if callable(value) else value
        if names is None:
            return None
        _check_names(field_name, names)
        return list(names)

    def resolve_pre_depends(self) -> Optional[List[str]]:
        return self._resolve("pre_depends", self.pre_depends)

    def resolve_post_depends(self) -> Optional[List[str]]:
        return self._resolve("post_depends", self.post_depends)

    def resolve_clean_depends(self) -> Optional[List[str]]:
        return self._resolve("clean_depends", self.clean_depends)
