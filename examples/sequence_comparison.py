from __future__ import annotations

from gnuexplore import Comparison, Sequence


def comparing_iterations() -> None:
    first = Sequence([0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    second = Sequence([0.0, 1.4, 10.0, 4.0])
    Comparison([first, second]).set_title("All together").plot(1)


def growing_comparison() -> None:
    first = Sequence([0.0, 1.0, 2.0, 3.0, 4.0, 5.0]).set_title("First")
    comparison = first.compare_with([Sequence([0.0, 1.4, 10.0, 4.0]).set_title("Second")])

    # Keep adding more
    comparison.add([Sequence([0.1, 1.5, 7.0, 5.0]).set_title("Third")])

    comparison.set_title("More comparisons").plot("my_serie_name")


if __name__ == "__main__":
    comparing_iterations()
    growing_comparison()
