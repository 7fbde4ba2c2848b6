"""
Tests for the reconciliation engine and its lookup strategies
"""

import random

import pytest

from statement_recon.config import ReconConfig
from statement_recon.matching.engine import ReconciliationEngine
from statement_recon.matching.strategies import LinearScanStrategy, SortedIndexStrategy
from statement_recon.models.transaction import ReconciliationSummary
from statement_recon.utils.exceptions import MissingDataError


class TestReconciliationEngine:

    def setup_method(self):
        self.engine = ReconciliationEngine(ReconConfig())

    def test_partition_is_complete(self, make_record, make_expected):
        observed = [make_record(50.0), make_record(75.5)]
        expected = [make_expected(v) for v in (50.0, 10.0, 75.5, 99.0)]

        result = self.engine.reconcile(expected, observed)

        assert len(result.matched) + len(result.unmatched) == len(expected)
        assert result.expected_count == 4

    def test_tolerance(self, make_record, make_expected):
        close = self.engine.reconcile([make_expected(100.0)], [make_record(100.009)])
        far = self.engine.reconcile([make_expected(100.0)], [make_record(100.02)])

        assert len(close.matched) == 1
        assert close.matched[0].difference == pytest.approx(0.009)
        assert len(far.matched) == 0
        assert far.unmatched[0].amount == 100.0

    def test_order_preserved(self, make_record, make_expected):
        observed = [make_record(3.0), make_record(1.0)]
        expected = [make_expected(v) for v in (1.0, 8.0, 3.0, 9.0, 7.0)]

        result = self.engine.reconcile(expected, observed)

        assert [m.expected.amount for m in result.matched] == [1.0, 3.0]
        assert [u.amount for u in result.unmatched] == [8.0, 9.0, 7.0]

    def test_first_movement_in_original_order_wins(self, make_record, make_expected):
        first = make_record(50.0, description="first")
        second = make_record(50.0, description="second")

        result = self.engine.reconcile([make_expected(50.0)], [first, second])

        assert result.matched[0].transaction is first

    def test_movement_sign_ignored(self, make_record, make_expected):
        debit = make_record(-42.0, description="card payment")

        result = self.engine.reconcile([make_expected(42.0)], [debit])

        assert result.matched[0].transaction is debit

    def test_negative_expected_amount_compared_unsigned(self, make_record, make_expected):
        debit = make_record(-42.0)

        for strategy in ("linear", "sorted_index"):
            engine = ReconciliationEngine(ReconConfig(matching={"strategy": strategy}))
            result = engine.reconcile([make_expected(-42.0)], [make_record(7.0), debit])

            assert result.matched[0].transaction is debit
            assert result.matched[0].difference == pytest.approx(0.0)

    def test_movement_reused_for_equal_expected_amounts(self, make_record, make_expected):
        only = make_record(20.0)

        result = self.engine.reconcile([make_expected(20.0), make_expected(20.0)], [only])

        assert len(result.matched) == 2
        assert all(m.transaction is only for m in result.matched)

    def test_one_to_one_pairing_when_reuse_disabled(self, make_record, make_expected):
        engine = ReconciliationEngine(ReconConfig(matching={"reuse_transactions": False}))
        a = make_record(20.0, description="a")
        b = make_record(20.0, description="b")
        expected = [make_expected(20.0), make_expected(20.0), make_expected(20.0)]

        result = engine.reconcile(expected, [a, b])

        assert [m.transaction for m in result.matched] == [a, b]
        assert len(result.unmatched) == 1

    def test_no_movements_raises(self, make_expected):
        with pytest.raises(MissingDataError):
            self.engine.reconcile([make_expected(1.0)], [])

    def test_no_expected_amounts_gives_zero_rate(self, make_record):
        result = self.engine.reconcile([], [make_record(5.0)])

        assert result.matched == []
        assert result.unmatched == []
        assert result.summary.match_rate == 0

    def test_custom_tolerance(self, make_record, make_expected):
        engine = ReconciliationEngine(ReconConfig(matching={"tolerance": 0.5}))

        result = engine.reconcile([make_expected(10.0)], [make_record(10.4)])

        assert len(result.matched) == 1

    def test_generate_summary(self, make_record, make_expected):
        observed = [make_record(v) for v in (1.0, 2.0, 3.0)]
        expected = [make_expected(v) for v in (1.0, 2.0, 3.0, 4.0)]

        summary = self.engine.generate_summary(self.engine.reconcile(expected, observed))

        assert summary.expected_count == 4
        assert summary.matched_count == 3
        assert summary.unmatched_count == 1
        assert summary.total_records == 3
        assert summary.match_rate == 75.0


class TestReconciliationSummary:

    def test_empty_rate_is_zero(self):
        assert ReconciliationSummary(0, 0, 0).match_rate == 0.0

    def test_rate_one_decimal(self):
        summary = ReconciliationSummary(expected_count=3, matched_count=2, unmatched_count=1)

        assert f"{summary.match_rate:.1f}" == "66.7"


class TestStrategies:

    def test_sorted_index_matches_linear_scan(self, make_record, make_expected):
        rng = random.Random(42)
        pool = [round(rng.uniform(1, 200), 2) for _ in range(60)]
        observed = [make_record(rng.choice((1, -1)) * rng.choice(pool)) for _ in range(300)]
        expected = [
            make_expected(round(rng.choice(pool) + rng.choice((0, 0.005, 0.3)), 3))
            for _ in range(200)
        ]

        for reuse in (True, False):
            results = []
            for strategy in ("linear", "sorted_index"):
                config = ReconConfig(
                    matching={"strategy": strategy, "reuse_transactions": reuse}
                )
                result = ReconciliationEngine(config).reconcile(expected, observed)
                results.append(
                    (
                        [(m.expected, id(m.transaction)) for m in result.matched],
                        result.unmatched,
                    )
                )

            assert results[0] == results[1]

    def test_sorted_index_picks_earliest_position(self, make_record):
        strategy = SortedIndexStrategy(tolerance=0.01)
        strategy.index([make_record(10.001), make_record(9.0), make_record(9.995)])

        assert strategy.find_match(10.0) == 0
        assert strategy.find_match(10.0, excluded={0}) == 2
        assert strategy.find_match(10.0, excluded={0, 2}) is None

    def test_linear_scan_excluded_positions(self, make_record):
        strategy = LinearScanStrategy(tolerance=0.01)
        strategy.index([make_record(5.0), make_record(5.0)])

        assert strategy.find_match(5.0) == 0
        assert strategy.find_match(5.0, excluded={0}) == 1
        assert strategy.find_match(6.0) is None
