from __future__ import annotations

from pathlib import Path
import re
import tempfile
import unittest

import numpy as np

from gnuexplore import (
    Comparison,
    Configuration,
    Data,
    Distribution,
    OutputSettings,
    PlotDataError,
    Process,
    Sequence,
    SequenceBin,
)
from gnuexplore.persistence import child_identifier, data_reference
from gnuexplore.script import PAUSE_LINE, preamble, quote, render, script_path, write_script
from gnuexplore.stats import HISTOGRAM_BINS, group_offsets, histogram_stats

SETTINGS = OutputSettings()


def _plot_line(text: str, keyword: str = "plot") -> str:
    lines = [line for line in text.splitlines() if line.startswith(keyword + " ")]
    assert len(lines) == 1, lines
    return lines[0]


class HistogramStatsTests(unittest.TestCase):
    def test_histogram_stats_for_one_to_five(self) -> None:
        stats = histogram_stats(np.asarray([1, 2, 3, 4, 5], dtype=np.float64))
        self.assertEqual(stats.minimum, 1.0)
        self.assertEqual(stats.maximum, 5.0)
        self.assertEqual(stats.count, 5)
        self.assertEqual(stats.bins, HISTOGRAM_BINS)
        self.assertAlmostEqual(stats.width, 0.2, places=12)

    def test_histogram_stats_ignores_input_order(self) -> None:
        stats = histogram_stats(np.asarray([3.0, -1.0, 7.0, 2.0]))
        self.assertEqual((stats.minimum, stats.maximum, stats.count), (-1.0, 7.0, 4))
        self.assertAlmostEqual(stats.width, 0.4, places=12)

    def test_degenerate_histograms_are_rejected(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "empty distribution"):
            histogram_stats(np.asarray([], dtype=np.float64))
        with self.assertRaisesRegex(PlotDataError, "degenerate"):
            histogram_stats(np.asarray([2.0, 2.0, 2.0]))
        with self.assertRaisesRegex(PlotDataError, "not finite"):
            histogram_stats(np.asarray([1.0, np.inf]))

    def test_missing_realizations_are_rejected_before_counting(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "not finite: 1 of 3"):
            histogram_stats(np.asarray([1.0, np.nan, 5.0]))
        with self.assertRaisesRegex(PlotDataError, "not finite"):
            render(Distribution([1, None, 5]), "d", settings=SETTINGS)

    def test_group_offsets_lay_series_side_by_side(self) -> None:
        self.assertEqual(group_offsets([3, 1, 2]), [0, 3, 4])
        with self.assertRaises(PlotDataError):
            group_offsets([2, 0])


class ScriptTests(unittest.TestCase):
    def test_end_to_end_sequence_scenario(self) -> None:
        seq = Sequence([1, 2, 4]).set_logx(-2).set_title("My Title")
        text = render(seq, "my_serie_name", settings=SETTINGS)
        lines = text.splitlines()
        self.assertEqual(lines[0], "set key")
        self.assertIn("set logscale x", lines)
        self.assertIn('set title "My Title"', lines)
        plot = _plot_line(text)
        self.assertIn('"data/my_serie_name.txt" using 1', plot)
        self.assertEqual(lines[-1], PAUSE_LINE)

    def test_sequence_script_is_exact(self) -> None:
        text = render(Sequence([1, 2, 4]), "seq", settings=SETTINGS)
        self.assertEqual(
            text,
            'set key\nplot "data/seq.txt" using 1:2 with lines title "0"\npause -1\n',
        )

    def test_preamble_orders_and_formats_directives(self) -> None:
        cfg = Configuration(title="T", logx=10.0, logy=-1.0, labelx="time", labely="value")
        self.assertEqual(
            preamble(cfg),
            [
                "set key",
                'set title "T"',
                'set xlabel "time"',
                'set ylabel "value"',
                "set logscale x 10",
                "set logscale y",
            ],
        )

    def test_preamble_zero_base_is_bare_and_fractional_base_kept(self) -> None:
        self.assertEqual(preamble(Configuration(logx=0.0)), ["set key", "set logscale x"])
        self.assertEqual(preamble(Configuration(logy=2.5)), ["set key", "set logscale y 2.5"])

    def test_non_finite_log_base_is_passed_verbatim(self) -> None:
        seq = Sequence([1, 2]).set_logx(float("nan")).set_logy(float("inf"))
        lines = render(seq, "s", settings=SETTINGS).splitlines()
        self.assertIn("set logscale x nan", lines)
        self.assertIn("set logscale y inf", lines)

    def test_unset_options_emit_no_directives(self) -> None:
        text = render(Process([0, 1], [1, 2]), "p", settings=SETTINGS)
        self.assertNotIn("set title", text)
        self.assertNotIn("logscale", text)

    def test_titles_are_quoted_for_gnuplot(self) -> None:
        self.assertEqual(quote('say "hi"'), '"say \\"hi\\""')
        seq = Sequence([1]).set_title('a "b"')
        self.assertIn('set title "a \\"b\\""', render(seq, "q", settings=SETTINGS))

    def test_process_style_and_dashtype(self) -> None:
        proc = Process([1, 10, 100], [1, 2, 4]).set_style("linespoints").set_dashtype(2)
        plot = _plot_line(render(proc, "proc", settings=SETTINGS))
        self.assertEqual(plot, 'plot "data/proc.txt" using 1:2 with linespoints dashtype 2 title "0"')

    def test_distribution_constants_and_clause(self) -> None:
        dist = Distribution([1, 2, 3, 4, 5]).set_title("d")
        text = render(dist, "dist", settings=SETTINGS)
        lines = text.splitlines()
        self.assertIn("nbins_0 = 20.0 #number of bins", lines)
        self.assertIn("max_0 = 5.0 #max value", lines)
        self.assertIn("min_0 = 1.0 #min value", lines)
        self.assertIn("len_0 = 5.0 #number of values", lines)
        self.assertIn("width_0 = 0.2 #width", lines)
        self.assertIn("hist_0(x) = width_0 * floor(x/width_0) + width_0 / 2.0", lines)
        self.assertEqual(
            _plot_line(text),
            'plot "data/dist.txt" using (hist_0($1)):(1.0/len_0) smooth frequency with steps title "d"',
        )

    def test_distribution_of_constant_values_is_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            render(Distribution([3, 3, 3]), "flat", settings=SETTINGS)

    def test_render_is_deterministic(self) -> None:
        targets = [
            Sequence([1, 2, 4]).set_title("x"),
            Distribution([0.5, 1.5, 9.0]),
            SequenceBin([[1, 2, 3], [2, 5, 9, 11]]),
            Comparison([Process([0, 1], [1, 0]), Process([0, 1], [0, 1])]).set_logy(2),
        ]
        for target in targets:
            self.assertEqual(render(target, "same", settings=SETTINGS), render(target, "same", settings=SETTINGS))

    def test_violin_script_two_passes_and_shared_renormalize(self) -> None:
        bins = SequenceBin([[1.0, 1.1, 0.9, 1.05], [0.0, 5.0, 10.0, 2.5, 7.5]])
        text = render(bins, "violin", settings=SETTINGS)
        lines = [line.strip() for line in text.splitlines()]

        self.assertEqual(lines.count("renormalize = 2"), 1)
        self.assertIn("do for [i=0:1] {", lines)
        self.assertEqual(lines.count('plot "data/violin.txt" index i using 2:(1) smooth kdensity'), 2)
        self.assertIn(
            "renormalize = (renormalize < 2 * GPVAL_Y_MAX) ? 2 * GPVAL_Y_MAX : renormalize",
            lines,
        )
        self.assertIn("x_min = GPVAL_X_MIN - 5 * GPVAL_KDENSITY_BANDWIDTH", lines)
        self.assertIn("x_max = GPVAL_X_MAX + 5 * GPVAL_KDENSITY_BANDWIDTH", lines)
        self.assertIn('set table sprintf("data/violin.txt_partial_%d", i)', lines)

        right = _plot_line(text, "plot")
        left = _plot_line(text, "replot")
        self.assertEqual(
            right,
            'plot for [i=0:1] sprintf("data/violin.txt_partial_%d", i) '
            "using (i + $2/renormalize):1 with filledcurve x=i linecolor i notitle",
        )
        self.assertEqual(
            left,
            'replot for [i=0:1] sprintf("data/violin.txt_partial_%d", i) '
            "using (i - $2/renormalize):1 with filledcurve x=i linecolor i notitle",
        )
        # Only one scale variable exists and both halves divide by it.
        self.assertEqual(set(re.findall(r"\$2/(\w+)", right + left)), {"renormalize"})
        self.assertLess(text.index("renormalize = (renormalize"), text.index(right))
        self.assertTrue(text.endswith("pause -1\n"))

    def test_violin_tables_never_shadow_data_files(self) -> None:
        standalone = render(SequenceBin([[1, 2], [3, 4]]), "run", settings=SETTINGS)
        compared = Comparison([SequenceBin([[1, 2]]), SequenceBin([[3, 4]])]).render("run_violin", settings=SETTINGS)
        tables = set(re.findall(r'sprintf\("([^"]+)"', standalone + compared))
        self.assertEqual(
            tables,
            {"data/run.txt_partial_%d", "data/run_violin_0.txt_partial_%d", "data/run_violin_1.txt_partial_%d"},
        )
        data_files = {data_reference("run", SETTINGS), data_reference(child_identifier("run_violin", 0), SETTINGS)}
        for table in tables:
            for group in range(2):
                self.assertNotIn(table % group, data_files)
                self.assertFalse((table % group).endswith(".txt"))

    def test_data_records_default_to_error_lines(self) -> None:
        data = Data([0, 0.5, 1, 0.25, 2, 0.125], 2).set_title("Numerical results")
        self.assertEqual(
            _plot_line(render(data, "my_identifier", settings=SETTINGS)),
            'plot "data/my_identifier.txt" using 0:1:2 with yerrorlines title "Numerical results"',
        )

    def test_data_records_with_plain_style_or_one_column(self) -> None:
        lines = Data([0, 0.5, 1, 0.25], 2).set_style("points")
        self.assertEqual(
            _plot_line(render(lines, "pts", settings=SETTINGS)),
            'plot "data/pts.txt" using 0:1 with points title "0"',
        )
        single = Data([3, 1, 2], 1)
        self.assertEqual(
            _plot_line(render(single, "one", settings=SETTINGS)),
            'plot "data/one.txt" using 0:1 with lines title "0"',
        )
        bars = Data([1, 0.1, 9, 2, 0.2, 8], 3).set_style("yerrorbars")
        self.assertIn("using 0:1:2 with yerrorbars", render(bars, "bars", settings=SETTINGS))

    def test_write_script_uses_plots_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            settings = OutputSettings(root=Path(tmp))
            path = write_script(Sequence([1, 2]), "written", settings=settings)
            self.assertEqual(path, Path(tmp) / "plots" / "written.gnu")
            self.assertEqual(path, script_path("written", settings))
            self.assertEqual(path.read_text(encoding="utf-8"), render(Sequence([1, 2]), "written", settings=settings))

    def test_custom_data_dir_is_referenced_by_script(self) -> None:
        settings = OutputSettings(data_dir="series")
        self.assertIn('"series/custom.txt"', render(Sequence([1]), "custom", settings=settings))


if __name__ == "__main__":
    unittest.main()
