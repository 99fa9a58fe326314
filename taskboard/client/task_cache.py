"""Client-side task cache as a pure reducer.

State is immutable. Every ``begin_*`` function returns the patched state and
a ``PendingOp`` describing how to undo the patch; ``commit`` swaps the
optimistic entry for the server's copy and ``rollback`` undoes it.
Filtered views and counts are derived from the cached list only.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from taskboard.c1_task_enums.task_enums import TaskStatus

TaskDict = Dict[str, Any]


class OpKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    STATUS = "status"
    DELETE = "delete"


class TaskFilter(str, Enum):
    """Dashboard filters."""
    ALL = "all"
    MINE = "my-tasks"
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PendingOp:
    """An optimistic patch awaiting the server's answer.

    ``previous`` is the task as it was before the patch (None for a create)
    and ``index`` its position in the list, so a rollback restores both.
    """

    op_id: str
    kind: OpKind
    task_id: str
    previous: Optional[TaskDict] = None
    index: int = 0


@dataclass(frozen=True)
class CacheState:
    tasks: Tuple[TaskDict, ...] = ()
    pending_ops: Tuple[PendingOp, ...] = field(default_factory=tuple)

    def find(self, task_id: str) -> Optional[TaskDict]:
        for task in self.tasks:
            if task.get("id") == task_id:
                return task
        return None

    def is_pending(self, task_id: str) -> bool:
        return any(op.task_id == task_id for op in self.pending_ops)


def _new_op_id() -> str:
    return uuid.uuid4().hex


def _index_of(tasks: Tuple[TaskDict, ...], task_id: str) -> int:
    for i, task in enumerate(tasks):
        if task.get("id") == task_id:
            return i
    raise KeyError(task_id)


def _replace_at(tasks: Tuple[TaskDict, ...], index: int, task: TaskDict) -> Tuple[TaskDict, ...]:
    return tasks[:index] + (task,) + tasks[index + 1:]


def _pop_op(state: CacheState, op_id: str) -> Tuple[Optional[PendingOp], Tuple[PendingOp, ...]]:
    op = next((o for o in state.pending_ops if o.op_id == op_id), None)
    remaining = tuple(o for o in state.pending_ops if o.op_id != op_id)
    return op, remaining


def assignee_id(task: TaskDict) -> Optional[str]:
    """The assignee's id whether the task carries a joined user or a bare id."""
    assignee = task.get("assignedUserId")
    if isinstance(assignee, dict):
        return assignee.get("id")
    return assignee


def replace_all(state: CacheState, tasks) -> CacheState:
    """Re-synchronise with an authoritative list. Outstanding patches are dropped."""
    return CacheState(tasks=tuple(dict(t) for t in tasks), pending_ops=())


def begin_create(
    state: CacheState,
    title: str,
    description: str,
    assignee: Dict[str, Any],
    now: Optional[str] = None,
) -> Tuple[CacheState, PendingOp]:
    """Insert a placeholder task at the top of the list (newest first)."""
    op_id = _new_op_id()
    temp_id = f"temp-{op_id}"
    draft = {
        "id": temp_id,
        "title": title,
        "description": description,
        "status": TaskStatus.PENDING.value,
        "assignedUserId": dict(assignee),
        "createdAt": now,
        "updatedAt": now,
    }
    op = PendingOp(op_id=op_id, kind=OpKind.CREATE, task_id=temp_id)
    return replace(state, tasks=(draft,) + state.tasks, pending_ops=state.pending_ops + (op,)), op


def _begin_patch(state: CacheState, task_id: str, kind: OpKind, changes: Dict[str, Any]):
    index = _index_of(state.tasks, task_id)
    previous = state.tasks[index]
    op = PendingOp(op_id=_new_op_id(), kind=kind, task_id=task_id, previous=previous, index=index)
    tasks = _replace_at(state.tasks, index, {**previous, **changes})
    return replace(state, tasks=tasks, pending_ops=state.pending_ops + (op,)), op


def begin_update(
    state: CacheState,
    task_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
) -> Tuple[CacheState, PendingOp]:
    """Patch title and/or description in place.

    Raises:
        KeyError: If the task is not in the cache
    """
    changes = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    return _begin_patch(state, task_id, OpKind.UPDATE, changes)


def begin_status(state: CacheState, task_id: str, status: str) -> Tuple[CacheState, PendingOp]:
    """Patch the status in place.

    Raises:
        KeyError: If the task is not in the cache
    """
    return _begin_patch(state, task_id, OpKind.STATUS, {"status": TaskStatus(status).value})


def begin_delete(state: CacheState, task_id: str) -> Tuple[CacheState, PendingOp]:
    """Remove the task from the list, remembering where it was.

    Raises:
        KeyError: If the task is not in the cache
    """
    index = _index_of(state.tasks, task_id)
    op = PendingOp(
        op_id=_new_op_id(),
        kind=OpKind.DELETE,
        task_id=task_id,
        previous=state.tasks[index],
        index=index,
    )
    tasks = state.tasks[:index] + state.tasks[index + 1:]
    return replace(state, tasks=tasks, pending_ops=state.pending_ops + (op,)), op


def commit(state: CacheState, op: PendingOp, server_task: Optional[TaskDict] = None) -> CacheState:
    """Accept the server's answer for an op.

    The optimistic entry is replaced by ``server_task`` where one is given.
    If the op was dropped by a re-sync the server copy is still merged in.
    """
    _, remaining = _pop_op(state, op.op_id)
    tasks = state.tasks

    if op.kind is OpKind.DELETE:
        tasks = tuple(t for t in tasks if t.get("id") != op.task_id)
    elif server_task is not None:
        server_task = dict(server_task)
        try:
            index = _index_of(tasks, op.task_id)
            tasks = _replace_at(tasks, index, server_task)
        except KeyError:
            if op.kind is OpKind.CREATE and state.find(server_task.get("id")) is None:
                tasks = (server_task,) + tasks
            else:
                try:
                    index = _index_of(tasks, server_task.get("id"))
                    tasks = _replace_at(tasks, index, server_task)
                except KeyError:
                    pass

    return CacheState(tasks=tasks, pending_ops=remaining)


def rollback(state: CacheState, op: PendingOp) -> CacheState:
    """Undo an op's optimistic patch. Ops already dropped by a re-sync are ignored."""
    pending, remaining = _pop_op(state, op.op_id)
    if pending is None:
        return state

    tasks = state.tasks
    if op.kind is OpKind.CREATE:
        tasks = tuple(t for t in tasks if t.get("id") != op.task_id)
    elif op.kind is OpKind.DELETE:
        index = min(op.index, len(tasks))
        tasks = tasks[:index] + (op.previous,) + tasks[index:]
    else:
        try:
            index = _index_of(tasks, op.task_id)
            tasks = _replace_at(tasks, index, op.previous)
        except KeyError:
            pass

    return CacheState(tasks=tasks, pending_ops=remaining)


def filter_tasks(tasks, user_id: Optional[str] = None, mine: bool = False,
                 status: Optional[str] = None) -> Tuple[TaskDict, ...]:
    """Tasks matching both predicates: assigned to user_id (when mine) and status."""
    result = []
    for task in tasks:
        if mine and assignee_id(task) != user_id:
            continue
        if status is not None and task.get("status") != status:
            continue
        result.append(task)
    return tuple(result)


def apply_filter(tasks, task_filter, user_id: Optional[str] = None) -> Tuple[TaskDict, ...]:
    task_filter = TaskFilter(task_filter)
    if task_filter is TaskFilter.MINE:
        return filter_tasks(tasks, user_id=user_id, mine=True)
    if task_filter is TaskFilter.PENDING:
        return filter_tasks(tasks, status=TaskStatus.PENDING.value)
    if task_filter is TaskFilter.COMPLETED:
        return filter_tasks(tasks, status=TaskStatus.COMPLETED.value)
    return tuple(tasks)


def task_stats(tasks, user_id: Optional[str] = None) -> Dict[str, int]:
    """Counts shown on the dashboard."""
    tasks = tuple(tasks)
    return {
        "total": len(tasks),
        "myTasks": len(filter_tasks(tasks, user_id=user_id, mine=True)),
        "pending": len(filter_tasks(tasks, status=TaskStatus.PENDING.value)),
        "completed": len(filter_tasks(tasks, status=TaskStatus.COMPLETED.value)),
    }
