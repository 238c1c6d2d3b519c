from __future__ import annotations

import numpy as np

from gnuexplore import Comparison, Distribution, SequenceBin


def main() -> None:
    rng = np.random.default_rng(7)

    narrow = Distribution(rng.normal(0.0, 1.0, size=500)).set_title("sigma = 1")
    wide = Distribution(rng.normal(0.0, 3.0, size=200)).set_title("sigma = 3")
    Comparison([narrow, wide]).set_title("Histograms").plot_later("histograms")

    groups = [rng.normal(loc, 1.0 + loc, size=300) for loc in range(4)]
    SequenceBin(groups).set_title("Spread by step").plot_later("violins")


if __name__ == "__main__":
    main()
