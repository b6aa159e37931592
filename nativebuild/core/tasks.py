"""
Task model for nativebuild projects.

A task is a named unit of work with an ordered list of actions and a set of
tasks it depends on. Tasks live in a TaskContainer owned by a project; the
TaskGraph turns a set of requested task names into an execution order in
which every dependency runs before its dependents.
"""

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from nativebuild.core.exceptions import (
    DuplicateTaskError,
    TaskCycleError,
    TaskExecutionError,
    UnknownTaskError,
)

logger = logging.getLogger(__name__)

TaskAction = Callable[["Task"], None]


class Task:
    """
    A named build step.

    Attributes:
        name: Unique task name within its container
        description: Optional human readable description
    """

    def __init__(self, name: str, description: Optional[str] = None):
        self.name = name
        self.description = description
        self._dependencies: List[str] = []
        self._actions: List[TaskAction] = []

    @property
    def dependencies(self) -> List[str]:
        """Names of tasks that must run before this task, in declaration order."""
        return list(self._dependencies)

    @property
    def actions(self) -> List[TaskAction]:
        return list(self._actions)

    def depends_on(self, *names: str) -> "Task":
        """
        Declare that this task runs after the named tasks.

        Duplicate declarations are ignored.
        """
        for name in names:
            if name not in self._dependencies:
                self._dependencies.append(name)
                logger.debug(f"Task '{self.name}' depends on '{name}'")
        return self

    def do_last(self, action: TaskAction) -> "Task":
        """Append an action to the task."""
        self._actions.append(action)
        return self

    def execute(self) -> None:
        """
        Run all actions in order.

        Raises:
            TaskExecutionError: If an action raises
        """
        logger.info(f"> Task :{self.name}")
        for action in self._actions:
            try:
                action(self)
            except Exception as e:
                raise TaskExecutionError(self.name, e) from e

    def __repr__(self) -> str:
        return f"Task({self.name!r})"


class TaskContainer:
    """Named collection of tasks belonging to one project."""

    def __init__(self):
        self._tasks: Dict[str, Task] = {}

    def register(
        self,
        name: str,
        action: Optional[TaskAction] = None,
        description: Optional[str] = None,
    ) -> Task:
        """
        Register a new task.

        Args:
            name: Task name
            action: Optional first action of the task
            description: Optional description shown by ``nbuild tasks``

        Returns:
            The registered task

        Raises:
            DuplicateTaskError: If a task with this name exists
        """
        if name in self._tasks:
            raise DuplicateTaskError(name)
        task = Task(name, description)
        if action is not None:
            task.do_last(action)
        self._tasks[name] = task
        logger.debug(f"Registered task '{name}'")
        return task

    def get_by_name(self, name: str) -> Task:
        """
        Look up a task.

        Raises:
            UnknownTaskError: If no task has this name
        """
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def find_by_name(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def names(self) -> List[str]:
        return sorted(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)


class TaskGraph:
    """Execution planner over a TaskContainer."""

    def __init__(self, tasks: TaskContainer):
        self.tasks = tasks

    def plan(self, names: Iterable[str]) -> List[Task]:
        """
        Compute the execution order for the requested tasks.

        Dependencies are visited depth-first in declaration order, so the
        resulting order keeps requested tasks in the order they were given
        wherever the dependency edges allow it. Each task appears once.

        Args:
            names: Requested task names

        Returns:
            Tasks in execution order

        Raises:
            UnknownTaskError: If a requested or depended-on task is missing
            TaskCycleError: If the dependency edges form a cycle
        """
        order: List[Task] = []
        done = set()
        visiting: List[str] = []

        def visit(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                cycle = visiting[visiting.index(name) :] + [name]
                raise TaskCycleError(cycle)
            task = self.tasks.get_by_name(name)
            visiting.append(name)
            for dependency in task.dependencies:
                visit(dependency)
            visiting.pop()
            done.add(name)
            order.append(task)

        for name in names:
            visit(name)
        return order
