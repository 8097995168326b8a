"""Detached task runner used for work that outlives a Slack callback."""

from contextvars import copy_context
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

import structlog
from structlog.contextvars import bind_contextvars, get_contextvars

# Work beyond the worker count waits in the executor's unbounded queue.
_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="deploy-bg")


def run_async(
    func: Callable[..., Any],
    /,
    *args: Any,
    trace_id: str | None = None,
    **kwargs: Any,
) -> Future:
    """Submit *func* to the shared thread pool and return a Future.

    The caller's context variables (and so its structlog ``trace_id``) are
    copied into the worker. Nothing awaits the returned future on the
    request path, so exceptions are logged here before being re-raised into it.
    """

    context = copy_context()
    if trace_id is not None:
        existing_trace = context.run(lambda: get_contextvars().get("trace_id"))
        if existing_trace != trace_id:
            context.run(lambda: bind_contextvars(trace_id=trace_id))

    task_name = getattr(func, "__name__", repr(func))

    def runner() -> Any:
        try:
            return func(*args, **kwargs)
        except Exception:
            structlog.get_logger().exception("background_task_failed", task=task_name)
            raise

    return _executor.submit(context.run, runner)
