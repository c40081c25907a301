"""
Tests for the fee comparison charts and the end-to-end analysis workflow.
"""

import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from comparison import compare_platforms, reference_results
from main import FeeDragAnalyzer, default_catalog_path
from params import Params
from plan import InvestmentPlan
from platforms import load_catalog, single_rate_platform
from visualizations import FeeDragVisualizer

HERE = os.path.dirname(os.path.abspath(__file__))
CATALOG = os.path.join(HERE, "platforms.json")


class TestFeeDragVisualizer(unittest.TestCase):
    def setUp(self):
        self.params = Params()
        self.plan = InvestmentPlan.from_params(self.params)
        self.results = compare_platforms(load_catalog(CATALOG), self.plan)
        self.references = reference_results(self.plan)
        self.visualizer = FeeDragVisualizer(self.params)

    def tearDown(self):
        plt.close('all')

    def test_balance_chart_default_lines(self):
        fig = self.visualizer.create_balance_chart(self.results)
        ax = fig.axes[0]
        # no-fees line, cheapest, most expensive
        self.assertEqual(len(ax.get_lines()), 3)
        self.assertEqual(len(ax.get_lines()[0].get_xdata()), self.plan.years)

    def test_balance_chart_with_references_and_selection(self):
        shown = [self.results[1].platform.id]
        fig = self.visualizer.create_balance_chart(self.results, self.references, show=shown)
        labels = [line.get_label() for line in fig.axes[0].get_lines()]
        self.assertEqual(labels, ["No fees", self.results[1].platform.name, "Current Fees", "Industry Average"])

    def test_final_value_chart(self):
        fig = self.visualizer.create_final_value_chart(self.results, self.references)
        self.assertEqual(len(fig.axes[0].patches), 4)
        fig = self.visualizer.create_final_value_chart(self.results)
        self.assertEqual(len(fig.axes[0].patches), 2)

    def test_metrics_table_chart(self):
        fig = self.visualizer.create_metrics_table_chart(self.results)
        self.assertEqual(len(fig.axes), 1)

    def test_empty_results_rejected(self):
        for method in (self.visualizer.create_balance_chart,
                       self.visualizer.create_final_value_chart,
                       self.visualizer.create_metrics_table_chart):
            with self.assertRaises(ValueError):
                method([])

    def test_currency_axis_format(self):
        self.assertEqual(self.visualizer.format_currency(12_345.6), "£12,346")

    def test_zero_drag_label_has_no_sign(self):
        self.assertEqual(self.visualizer.drag_label(0.0), "£0")
        self.assertEqual(self.visualizer.drag_label(1_234.4), "-£1,234")

    def test_final_value_chart_labels(self):
        platforms = [single_rate_platform("free", "Free", 0.0, ("isa",)),
                     single_rate_platform("dear", "Dear", 0.45, ("isa",))]
        results = compare_platforms(platforms, self.plan)
        fig = self.visualizer.create_final_value_chart(results)
        labels = [text.get_text() for text in fig.axes[0].texts]
        self.assertEqual(labels[0], "£0")
        self.assertTrue(labels[1].startswith("-£"))


class TestFeeDragAnalyzer(unittest.TestCase):
    def setUp(self):
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        os.chdir(self._tmp.name)

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()
        plt.close('all')

    def test_complete_analysis(self):
        analyzer = FeeDragAnalyzer(Params(), catalog_path=CATALOG)
        self.assertTrue(analyzer.run_complete_analysis())
        self.assertTrue(analyzer.results)
        self.assertIsNotNone(analyzer.recommendations)
        for name in ("fee_drag_balances.png", "fee_drag_final_values.png", "fee_drag_table.png"):
            self.assertTrue(os.path.exists(name), name)

    def test_default_catalog_found_outside_repo(self):
        self.assertFalse(os.path.exists("platforms.json"))
        self.assertEqual(os.path.abspath(default_catalog_path("platforms.json")), CATALOG)
        analyzer = FeeDragAnalyzer(Params())
        self.assertTrue(analyzer.load_platforms())

    def test_missing_catalog(self):
        analyzer = FeeDragAnalyzer(Params(), catalog_path="missing.json")
        self.assertFalse(analyzer.run_complete_analysis())

    def test_invalid_plan(self):
        p = Params()
        p.years = 0
        analyzer = FeeDragAnalyzer(p, catalog_path=CATALOG)
        self.assertFalse(analyzer.run_complete_analysis())

    def test_no_eligible_platforms(self):
        p = Params()
        p.required_accounts = ("sipp",)
        analyzer = FeeDragAnalyzer(p, catalog_path=CATALOG)
        analyzer.load_plan()
        analyzer.platforms = tuple(x for x in load_catalog(CATALOG) if "sipp" not in x.accounts)
        self.assertFalse(analyzer.run_comparison())


if __name__ == '__main__':
    unittest.main()
