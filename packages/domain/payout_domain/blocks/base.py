"""Base classes for report blocks.

This module provides the foundation for the reporting layer:
- ReportBlock abstract base class
- ReportContext for passing data between blocks
- ReportExecutor for dependency resolution and execution
- Topological sort for DAG execution order

Blocks only read from a LedgerSnapshot placed in the context; they never
reach back into a live engine.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field


# =============================================================================
# Report Context
# =============================================================================

@dataclass
class ReportContext:
    """Keyed store that blocks read inputs from and write outputs to.

    Example:
        context = ReportContext()
        context.set("ledger_snapshot", engine.snapshot())

        LedgerSummaryBlock().execute(context)
        summary_df = context.get("ledger_summary")
    """

    _data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Get value from context.

        Raises:
            KeyError: If key not found in context
        """
        if key not in self._data:
            raise KeyError(f"Key '{key}' not found in context. Available keys: {list(self._data.keys())}")
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


# =============================================================================
# Block Base Class
# =============================================================================

class ReportBlock(ABC):
    """Reusable report computation unit.

    A block declares the context keys it reads and writes, and implements the
    computation in execute(). Declared keys let the executor order blocks.
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""
        pass

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""
        pass

    @abstractmethod
    def execute(self, context: ReportContext) -> None:
        """Read inputs from context, compute, write outputs to context."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Dependency Resolution
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks have circular dependencies."""
    pass


def topological_sort(blocks: List[ReportBlock]) -> List[ReportBlock]:
    """Order blocks so each runs after the blocks producing its inputs.

    Kahn's algorithm. Inputs no block produces are expected in the initial
    context.

    Raises:
        ValueError: If two blocks declare the same output
        CircularDependencyError: If blocks depend on each other in a cycle
    """
    producers: Dict[str, ReportBlock] = {}
    for block in blocks:
        for key in block.outputs():
            if key in producers:
                raise ValueError(
                    f"Multiple blocks produce '{key}': {producers[key]} and {block}"
                )
            producers[key] = block

    in_degree: Dict[ReportBlock, int] = {block: 0 for block in blocks}
    dependents: Dict[ReportBlock, List[ReportBlock]] = {block: [] for block in blocks}

    for block in blocks:
        for key in block.inputs():
            if key in producers:
                dependents[producers[key]].append(block)
                in_degree[block] += 1

    ready: List[ReportBlock] = [block for block in blocks if in_degree[block] == 0]
    ordered: List[ReportBlock] = []

    while ready:
        current = ready.pop(0)
        ordered.append(current)
        for dependent in dependents[current]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                ready.append(dependent)

    if len(ordered) != len(blocks):
        remaining = [block for block in blocks if in_degree[block] > 0]
        raise CircularDependencyError(
            f"Circular dependency detected among blocks: {remaining}"
        )

    return ordered


# =============================================================================
# Report Executor
# =============================================================================

class ReportExecutor:
    """Runs report blocks in dependency order.

    Example:
        executor = ReportExecutor([HolderBlock(), LedgerSummaryBlock(), DistributionBlock()])
        context = ReportContext()
        context.set("ledger_snapshot", engine.snapshot())
        executor.execute(context)

        holders_df = context.get("holder_payouts")
    """

    def __init__(self, blocks: List[ReportBlock]):
        self.blocks = blocks
        self._ordered: Optional[List[ReportBlock]] = None

    def execute(self, context: ReportContext) -> ReportContext:
        """Execute all blocks and return the populated context.

        Raises:
            CircularDependencyError: If blocks have circular dependencies
            KeyError: If a required input is missing from context
            ValueError: If a block does not write a declared output
        """
        if self._ordered is None:
            self._ordered = topological_sort(self.blocks)

        for block in self._ordered:
            for key in block.inputs():
                if not context.has(key):
                    raise KeyError(
                        f"Block {block} requires input '{key}' but it's not in context. "
                        f"Available keys: {context.keys()}"
                    )

            block.execute(context)

            for key in block.outputs():
                if not context.has(key):
                    raise ValueError(
                        f"Block {block} declared output '{key}' but didn't write it to context"
                    )

        return context
