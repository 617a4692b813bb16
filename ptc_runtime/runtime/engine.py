"""Code execution engine.

``CodeExecutor`` runs a caller-supplied Python snippet against generated
capability bindings and always returns an ``ExecutionResult``.

Execution model
---------------

- *Preparing*: a fresh ``CallRecorder``, log buffer and the three capability
  namespaces are built for the request.
- *Running*: the snippet is compiled as the verbatim body of
  ``async def <ptc>(tools, agents, skills, log, context)`` and scheduled as a
  task. No implicit return is injected; a snippet hands a value back with an
  explicit ``return``.
- *Completed* / *Failed* / *TimedOut*: the task is raced against the
  deadline with ``asyncio.wait``. Whichever settles first decides the outcome.

Deadline
--------

When the deadline wins, the snippet task is not cancelled unless
``ExecutorOptions.cancel_on_timeout`` is set: it keeps running in the
background and its calls may still append records after the result was
reported. Code that blocks the event loop without awaiting cannot be
interrupted at all.
"""

from __future__ import annotations

import ast
import asyncio
import builtins
import inspect
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ptc_runtime.bindings.generators import build_namespaces
from ptc_runtime.bindings.recorder import CallRecorder
from ptc_runtime.errors import ExecutionTimeoutError, PtcError, SnippetAbortedError, normalize_error
from ptc_runtime.host.base import HostClientProtocol
from ptc_runtime.schemas.catalog import AgentDescriptor, SkillDescriptor, ToolDescriptor
from ptc_runtime.schemas.execution import ExecutionContext, ExecutionResult, ExecutorOptions

logger = logging.getLogger(__name__)

SNIPPET_FILENAME = "<ptc>"
ENTRYPOINT_NAME = "__ptc_main__"
INJECTED_NAMES = ("tools", "agents", "skills", "log", "context")
# site.Quitter closes sys.stdin before raising SystemExit
WITHHELD_BUILTINS = ("exit", "quit")
_ENTRYPOINT_TEMPLATE = f"async def {ENTRYPOINT_NAME}({', '.join(INJECTED_NAMES)}):\n    pass\n"


def compile_snippet(code: str) -> Callable[..., Any]:
    """Compile ``code`` into an async function taking the injected names.

    The snippet's statements are grafted into the function body as parsed,
    so line numbers in tracebacks match the submitted text.

    Raises:
        SyntaxError: If the snippet is not valid Python, or uses constructs
            not allowed inside an async function body (e.g. ``yield``).
    """
    module = compile(
        code,
        SNIPPET_FILENAME,
        "exec",
        flags=ast.PyCF_ONLY_AST | ast.PyCF_ALLOW_TOP_LEVEL_AWAIT,
        dont_inherit=True,
    )
    wrapper = ast.parse(_ENTRYPOINT_TEMPLATE, filename=SNIPPET_FILENAME)
    func = wrapper.body[0]
    func.body = list(module.body) or func.body
    ast.fix_missing_locations(wrapper)
    compiled = compile(wrapper, SNIPPET_FILENAME, "exec", dont_inherit=True)
    snippet_builtins = {k: v for k, v in vars(builtins).items() if k not in WITHHELD_BUILTINS}
    namespace: Dict[str, Any] = {"__name__": "__ptc__", "__builtins__": snippet_builtins}
    exec(compiled, namespace)
    fn = namespace[ENTRYPOINT_NAME]
    if not inspect.iscoroutinefunction(fn):
        raise SyntaxError("'yield' is not allowed in submitted code")
    return fn


def _format_log_arg(arg: Any) -> str:
    if isinstance(arg, str):
        return arg
    if not isinstance(arg, (dict, list, tuple)):
        return str(arg)
    try:
        return json.dumps(arg)
    except (TypeError, ValueError):
        return str(arg)


async def _run_guarded(fn: Callable[..., Any], injected: Sequence[Any]) -> Any:
    """Await the snippet, converting non-``Exception`` raises into ``SnippetAbortedError``.

    ``SystemExit`` and ``KeyboardInterrupt`` must not leave the coroutine: the
    event loop re-raises them out of ``run_forever``.
    """
    try:
        return await fn(*injected)
    except (Exception, asyncio.CancelledError):
        raise
    except BaseException as e:
        raise SnippetAbortedError(e) from e


def _retrieve_orphan_exception(task: asyncio.Task) -> None:
    if task.cancelled():
        logger.debug("orphaned snippet task was cancelled")
        return
    err = task.exception()
    if err is not None:
        logger.debug("orphaned snippet task finished with error: %s", normalize_error(err))


class CodeExecutor:
    """Execute snippets against one capability catalog.

    The executor holds the catalog and options; every ``execute`` call builds
    fresh bindings, so executions never share call records or logs.
    """

    def __init__(
        self,
        client: HostClientProtocol,
        tools: Sequence[ToolDescriptor],
        agents: Sequence[AgentDescriptor],
        skills: Sequence[SkillDescriptor],
        options: Optional[ExecutorOptions] = None,
    ) -> None:
        """
        Initialize the CodeExecutor.

        Args:
            client: Host client used by tool bindings.
            tools: Tool descriptors to expose as ``tools``.
            agents: Agent descriptors to expose as ``agents``.
            skills: Skill descriptors to expose as ``skills``.
            options: Timeout, call ceiling and cancellation policy.
        """
        self._client = client
        self._tools = list(tools)
        self._agents = list(agents)
        self._skills = list(skills)
        self._options = options or ExecutorOptions()

    @property
    def options(self) -> ExecutorOptions:
        return self._options

    async def execute(self, code: str, context: ExecutionContext) -> ExecutionResult:
        """Run ``code`` and report its outcome.

        Never raises for failures originating in the snippet: syntax errors,
        raised exceptions, failed capability calls and timeouts all produce
        ``success=False`` with logs and call records gathered so far.
        """
        logs: List[str] = []
        recorder = CallRecorder(max_calls=self._options.max_tool_calls)
        tools, agents, skills = build_namespaces(
            self._client, self._tools, self._agents, self._skills, context, recorder
        )

        def log(*args: Any) -> None:
            logs.append(" ".join(_format_log_arg(a) for a in args))

        logger.debug(
            "CodeExecutor.execute: session=%s tools=%d agents=%d skills=%d timeout_ms=%d",
            context.session_id,
            len(tools),
            len(agents),
            len(skills),
            self._options.timeout_ms,
        )
        try:
            result = await self._execute_with_timeout(code, tools, agents, skills, log, context)
        except Exception as e:
            error = normalize_error(e)
            logger.info("CodeExecutor.execute: failed session=%s error=%s", context.session_id, error)
            return ExecutionResult(success=False, error=error, logs=logs, tool_calls=recorder.records)

        logger.info(
            "CodeExecutor.execute: completed session=%s tool_calls=%d", context.session_id, len(recorder)
        )
        return ExecutionResult(success=True, result=result, logs=logs, tool_calls=recorder.records)

    async def _execute_with_timeout(self, code: str, *injected: Any) -> Any:
        fn = compile_snippet(code)
        task = asyncio.ensure_future(_run_guarded(fn, injected))
        timeout_s = self._options.timeout_ms / 1000.0
        done, _ = await asyncio.wait({task}, timeout=timeout_s)
        if task in done:
            if task.cancelled():
                raise PtcError("Execution was cancelled")
            err = task.exception()
            if err is not None:
                raise err
            return task.result()

        if self._options.cancel_on_timeout:
            task.cancel()
        task.add_done_callback(_retrieve_orphan_exception)
        logger.warning(
            "CodeExecutor: deadline of %dms expired; snippet task %s",
            self._options.timeout_ms,
            "cancelled" if self._options.cancel_on_timeout else "left running",
        )
        raise ExecutionTimeoutError(self._options.timeout_ms)


def create_executor(
    client: HostClientProtocol,
    tools: Sequence[ToolDescriptor],
    agents: Sequence[AgentDescriptor],
    skills: Sequence[SkillDescriptor],
    options: Optional[ExecutorOptions] = None,
) -> CodeExecutor:
    return CodeExecutor(client, tools, agents, skills, options)
