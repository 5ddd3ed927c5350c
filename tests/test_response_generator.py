"""
tests/test_response_generator.py
--------------------------------
Unit tests for the plain-text dashboard renderer.

Coverage:
  - ResponseGenerator.leaderboard()    — one row per model, rank order, top model
  - ResponseGenerator.stats() / weights_banner()
"""

import unittest

from fuzzyfolio.constants import DEFAULT_WEIGHTS, MODEL_REGISTRY
from fuzzyfolio.dashboard_engine import DashboardEngine
from fuzzyfolio.enums import Model
from fuzzyfolio.response_generator import ResponseGenerator
from fuzzyfolio.simulation_engine import SimulationEngine
from fuzzyfolio.topsis_engine import TopsisEngine


class TestLeaderboard(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.points = SimulationEngine.generate()
        cls.rankings = TopsisEngine.rank(cls.points, DEFAULT_WEIGHTS)
        cls.out = ResponseGenerator()

    def test_one_row_per_model(self):
        text = self.out.leaderboard(self.rankings)
        for model in Model:
            self.assertIn(MODEL_REGISTRY[model]["display"], text)

    def test_rows_follow_ranking(self):
        lines = self.out.leaderboard(self.rankings).splitlines()
        rows = [l for l in lines if l[:1].isdigit()]
        self.assertEqual(len(rows), 7)
        self.assertTrue(rows[0].startswith("1 "))
        self.assertIn(MODEL_REGISTRY[self.rankings[0].model]["display"], rows[0])

    def test_top_model_line(self):
        text = self.out.leaderboard(self.rankings)
        self.assertIn("Top model: M7 Optimal", text)

    def test_empty_rankings(self):
        text = self.out.leaderboard([])
        self.assertNotIn("Top model", text)

    def test_stats_block(self):
        stats = DashboardEngine.headline_stats(self.points, self.rankings)
        text = self.out.stats(stats)
        self.assertIn("11,626", text)
        self.assertIn("M7 Best", text)

    def test_weights_banner_total(self):
        banner = self.out.weights_banner(DEFAULT_WEIGHTS)
        self.assertIn("return=40%", banner)
        self.assertIn("Total: 100%", banner)


if __name__ == "__main__":
    unittest.main()
