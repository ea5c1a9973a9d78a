"""Pre/post write hook point offered by the persistence layer

A hook pairs an optional ``before`` stage with an ``after`` stage. ``before``
runs ahead of the write and whatever it returns is handed to ``after`` once
the write is committed. Hooks without a ``before`` stage receive the write
target itself.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from ..enums import WriteOperation

BeforeStage = Callable[[Any], Awaitable[Any]]
AfterStage = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True)
class WriteHook:
    after: AfterStage
    before: Optional[BeforeStage] = None


@dataclass
class PendingWrite:
    """Contexts captured before a write, waiting for their after stages"""
    operation: WriteOperation
    captured: List[Tuple[WriteHook, Any]] = field(default_factory=list)

    async def complete(self) -> None:
        for hook, context in self.captured:
            await hook.after(context)


class WriteHooks:

    def __init__(self):
        self._hooks: Dict[WriteOperation, List[WriteHook]] = defaultdict(list)

    def register(
        self,
        operation: WriteOperation,
        after: AfterStage,
        before: Optional[BeforeStage] = None
    ) -> None:
        self._hooks[operation].append(WriteHook(after=after, before=before))

    def registered(self, operation: WriteOperation) -> List[WriteHook]:
        return list(self._hooks[operation])

    async def run_before(self, operation: WriteOperation, target: Any) -> PendingWrite:
        pending = PendingWrite(operation=operation)
        for hook in self._hooks[operation]:
            context = await hook.before(target) if hook.before else target
            pending.captured.append((hook, context))
        return pending
