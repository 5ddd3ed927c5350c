"""
tests/test_dashboard_engine.py
------------------------------
Unit tests for DashboardEngine and SessionContext.

Coverage:
  - filter_models()      — enabled-model filter keeps order
  - downsample()         — evenly spaced picks, budget respected
  - frontier_series()    — per-model budgets, z-index order, chart coordinates
  - headline_stats()     — M7 vs Markowitz figures, empty fallbacks
  - simulation_progress()
  - SessionContext       — window size validation, toggles, reset
"""

import unittest

from fuzzyfolio.constants import DEFAULT_ENABLED_MODELS, DEFAULT_WEIGHTS
from fuzzyfolio.dashboard_engine import DashboardEngine
from fuzzyfolio.enums import Model
from fuzzyfolio.models import ModelSummary, ScoredPoint
from fuzzyfolio.session_context import SessionContext
from fuzzyfolio.simulation_engine import SimulationEngine


def _point(model, ret=0.01, var=0.005, ent=1.0):
    if model.is_fuzzy:
        return ScoredPoint(model, ret, var, ent, alpha=0.3, beta=0.9)
    return ScoredPoint(model, ret, var, ent)


# ===========================================================================
# 1. Filtering and downsampling
# ===========================================================================

class TestFilterAndDownsample(unittest.TestCase):

    def test_filter_keeps_enabled_in_order(self):
        points = [_point(Model.M1, 0.1), _point(Model.M2), _point(Model.M1, 0.2)]
        kept = DashboardEngine.filter_models(points, [Model.M1])
        self.assertEqual([p.expected_return for p in kept], [0.1, 0.2])

    def test_filter_nothing_enabled(self):
        self.assertEqual(DashboardEngine.filter_models([_point(Model.M1)], []), [])

    def test_downsample_within_budget_returns_all(self):
        self.assertEqual(DashboardEngine.downsample([1, 2, 3], 5), [1, 2, 3])

    def test_downsample_even_spacing(self):
        self.assertEqual(DashboardEngine.downsample(list(range(10)), 4), [0, 2, 5, 7])

    def test_downsample_budget(self):
        self.assertEqual(len(DashboardEngine.downsample(list(range(8208)), 500)), 500)

    def test_downsample_zero_budget(self):
        self.assertEqual(DashboardEngine.downsample([1, 2], 0), [])


# ===========================================================================
# 2. Frontier series
# ===========================================================================

class TestFrontierSeries(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.points = SimulationEngine.generate()

    def test_default_models_with_budgets(self):
        series = DashboardEngine.frontier_series(self.points, DEFAULT_ENABLED_MODELS)
        sizes = {s["model"]: len(s["points"]) for s in series}
        self.assertEqual(sizes, {
            Model.M7_CLOUD: 500,
            Model.M1: 150,
            Model.M3: 100,
            Model.M6: 100,
            Model.M7_BEST: 150,
        })

    def test_ordered_by_z_index(self):
        series = DashboardEngine.frontier_series(self.points, list(Model))
        self.assertEqual(series[0]["model"], Model.M7_CLOUD)
        self.assertEqual(series[-1]["model"], Model.M7_BEST)
        z = [s["z_index"] for s in series]
        self.assertEqual(z, sorted(z))

    def test_chart_coordinates_in_percent(self):
        p = _point(Model.M2, ret=0.012, var=0.004)
        series = DashboardEngine.frontier_series([p], [Model.M2])
        self.assertEqual(len(series), 1)
        entry = series[0]["points"][0]
        self.assertAlmostEqual(entry["x"], 0.4)
        self.assertAlmostEqual(entry["y"], 1.2)
        self.assertIs(entry["point"], p)

    def test_disabled_models_absent(self):
        series = DashboardEngine.frontier_series(self.points, [Model.COMP])
        self.assertEqual([s["model"] for s in series], [Model.COMP])
        self.assertEqual(len(series[0]["points"]), 80)


# ===========================================================================
# 3. Headline statistics
# ===========================================================================

class TestHeadlineStats(unittest.TestCase):

    def test_advantage_and_reduction(self):
        points = [
            _point(Model.M1, ret=0.01, var=0.008),
            _point(Model.M7_BEST, ret=0.015, var=0.002),
        ]
        rankings = [ModelSummary(Model.M7_BEST, topsis_score=0.9)]
        stats = DashboardEngine.headline_stats(points, rankings)
        self.assertEqual(stats["total_portfolios"], 2)
        self.assertAlmostEqual(stats["m7_advantage"], 50.0)
        self.assertAlmostEqual(stats["risk_reduction"], 75.0)
        self.assertEqual(stats["top_score"], 0.9)
        self.assertEqual(stats["best_model"], Model.M7_BEST)

    def test_negative_baseline_return_uses_magnitude(self):
        points = [
            _point(Model.M1, ret=-0.01, var=0.008),
            _point(Model.M7_BEST, ret=0.01, var=0.002),
        ]
        stats = DashboardEngine.headline_stats(points)
        self.assertAlmostEqual(stats["m7_advantage"], 200.0)

    def test_empty_inputs_fall_back(self):
        stats = DashboardEngine.headline_stats([], [])
        self.assertEqual(stats["total_portfolios"], 0)
        self.assertEqual(stats["m7_advantage"], 0.0)
        self.assertEqual(stats["risk_reduction"], 0.0)
        self.assertEqual(stats["top_score"], 0.0)
        self.assertEqual(stats["best_model"], Model.M7_BEST)

    def test_full_population_favours_m7(self):
        stats = DashboardEngine.headline_stats(SimulationEngine.generate())
        self.assertGreater(stats["m7_advantage"], 0)
        self.assertGreater(stats["risk_reduction"], 0)

    def test_progress(self):
        self.assertAlmostEqual(DashboardEngine.simulation_progress(10_000, 40_000), 25.0)
        self.assertEqual(DashboardEngine.simulation_progress(50_000, 40_000), 100.0)
        self.assertEqual(DashboardEngine.simulation_progress(5, 0), 100.0)


# ===========================================================================
# 4. SessionContext
# ===========================================================================

class TestSessionContext(unittest.TestCase):

    def test_defaults(self):
        ctx = SessionContext()
        self.assertEqual(ctx.window_size, 20)
        self.assertEqual(ctx.weights, DEFAULT_WEIGHTS)
        self.assertEqual(ctx.enabled_models, list(DEFAULT_ENABLED_MODELS))
        self.assertFalse(ctx.is_running)

    def test_window_size_bounds(self):
        ctx = SessionContext()
        ctx.set_window_size(12)
        ctx.set_window_size(36)
        with self.assertRaises(ValueError):
            ctx.set_window_size(11)
        with self.assertRaises(ValueError):
            SessionContext(window_size=37)

    def test_toggle_model(self):
        ctx = SessionContext()
        ctx.toggle_model(Model.M1)
        self.assertNotIn(Model.M1, ctx.enabled_models)
        ctx.toggle_model(Model.COMP)
        self.assertIn(Model.COMP, ctx.enabled_models)
        ctx.toggle_model(Model.M1)
        self.assertIn(Model.M1, ctx.enabled_models)

    def test_set_weight_does_not_touch_defaults(self):
        ctx = SessionContext()
        ctx.set_weight("return", 0.9)
        self.assertEqual(ctx.weights["return"], 0.9)
        self.assertEqual(DEFAULT_WEIGHTS["return"], 0.4)
        with self.assertRaises(ValueError):
            ctx.set_weight("sharpe", 0.5)

    def test_reset(self):
        ctx = SessionContext()
        ctx.toggle_running()
        ctx.set_window_size(30)
        ctx.toggle_model(Model.M7_BEST)
        ctx.reset()
        self.assertEqual(ctx, SessionContext())


if __name__ == "__main__":
    unittest.main()
