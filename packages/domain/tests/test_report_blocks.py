"""Tests for the report blocks architecture.

Tests cover:
- ReportContext get/set/has operations
- Topological sort and dependency resolution
- ReportExecutor validation and execution
- LedgerSummaryBlock, DistributionBlock, HolderBlock outputs
"""

import pytest

from payout_domain.blocks import (
    DistributionBlock,
    HolderBlock,
    LedgerSummaryBlock,
    ReportBlock,
    ReportContext,
    ReportExecutor,
    default_blocks,
)
from payout_domain.blocks.base import CircularDependencyError, topological_sort

ADMIN = "admin"


# =============================================================================
# ReportContext Tests
# =============================================================================

def test_context_get_set_has():
    context = ReportContext()
    assert not context.has("key1")
    context.set("key1", "value1")
    assert context.get("key1") == "value1"
    assert context.keys() == ["key1"]


def test_context_get_missing_key():
    context = ReportContext()
    with pytest.raises(KeyError, match="Key 'missing' not found"):
        context.get("missing")


# =============================================================================
# Topological Sort Tests
# =============================================================================

class SimpleBlock(ReportBlock):
    """Simple block for testing."""

    def __init__(self, name, inputs, outputs, write=True):
        self.name = name
        self._inputs = inputs
        self._outputs = outputs
        self._write = write

    def inputs(self):
        return self._inputs

    def outputs(self):
        return self._outputs

    def execute(self, context):
        if self._write:
            for output in self._outputs:
                context.set(output, f"{self.name}_output")

    def __repr__(self):
        return f"SimpleBlock({self.name})"


def test_topological_sort_linear_chain():
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_b"], ["data_c"])

    assert topological_sort([block_c, block_a, block_b]) == [block_a, block_b, block_c]


def test_topological_sort_circular_dependency():
    block_a = SimpleBlock("A", ["data_b"], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])

    with pytest.raises(CircularDependencyError, match="Circular dependency detected"):
        topological_sort([block_a, block_b])


def test_topological_sort_duplicate_output():
    with pytest.raises(ValueError, match="Multiple blocks produce"):
        topological_sort([SimpleBlock("A", [], ["x"]), SimpleBlock("B", [], ["x"])])


def test_executor_missing_input():
    executor = ReportExecutor([SimpleBlock("A", ["ledger_snapshot"], ["out"])])
    with pytest.raises(KeyError, match="requires input 'ledger_snapshot'"):
        executor.execute(ReportContext())


def test_executor_missing_output():
    executor = ReportExecutor([SimpleBlock("A", [], ["out"], write=False)])
    with pytest.raises(ValueError, match="didn't write it"):
        executor.execute(ReportContext())


# =============================================================================
# Ledger Blocks
# =============================================================================

def _run(engine, blocks=None) -> ReportContext:
    context = ReportContext()
    context.set("ledger_snapshot", engine.snapshot())
    return ReportExecutor(blocks or default_blocks()).execute(context)


def test_summary_block(funded_engine):
    funded_engine.claim(1, "holder_a")
    summary = _run(funded_engine, [LedgerSummaryBlock()]).get("ledger_summary")

    row = summary.iloc[0]
    assert len(summary) == 1
    assert row["total_shares"] == 1_000_000
    assert row["holders"] == 2
    assert row["distributions"] == 1
    assert row["active_distributions"] == 1
    assert row["total_distributed"] == 2_000_000
    assert row["total_claimed"] == 200_000
    assert row["total_unclaimed"] == 1_800_000
    assert row["rounding_dust"] == 0
    assert not row["paused"]


def test_distribution_block(funded_engine):
    funded_engine.claim(1, "holder_a")
    funded_engine.issue(ADMIN, "holder_c", 2)
    funded_engine.create_distribution(ADMIN, 1_000)
    funded_engine.close_distribution(ADMIN, 2)

    df = _run(funded_engine, [DistributionBlock()]).get("distribution_summary")

    assert list(df["distribution_id"]) == [1, 2]
    assert list(df["status"]) == ["active", "completed"]
    assert df.loc[0, "claimed_pct"] == pytest.approx(10.0)
    assert df.loc[0, "unclaimed_amount"] == 1_800_000
    # 1,000 over 1,000,002 shares leaves dust
    assert df.loc[1, "rounding_dust"] > 0


def test_distribution_block_empty_ledger(engine):
    df = _run(engine, [DistributionBlock()]).get("distribution_summary")
    assert df.empty
    assert "claimed_pct" in df.columns


def test_holder_block(funded_engine):
    funded_engine.claim(1, "holder_a")
    df = _run(funded_engine, [HolderBlock()]).get("holder_payouts")

    assert list(df["holder_id"]) == ["holder_b", "holder_a"]
    assert df.loc[0, "ownership_pct"] == pytest.approx(90.0)
    assert df.loc[1, "total_received"] == 200_000
    assert df.loc[1, "participation_count"] == 1
    assert df.loc[0, "participation_count"] == 0


def test_holder_block_zero_balances(funded_engine):
    funded_engine.transfer("holder_a", "holder_b", 100_000)

    with_zero = _run(funded_engine, [HolderBlock()]).get("holder_payouts")
    without_zero = _run(funded_engine, [HolderBlock(include_zero_balances=False)]).get("holder_payouts")

    assert "holder_a" in set(with_zero["holder_id"])
    assert list(without_zero["holder_id"]) == ["holder_b"]


def test_default_blocks_produce_all_frames(funded_engine):
    context = _run(funded_engine)
    assert {"ledger_summary", "distribution_summary", "holder_payouts"} <= set(context.keys())
