from __future__ import annotations

from itertools import chain

import numpy as np

from gnuexplore import Data


def main() -> None:
    mean = np.arange(10, dtype=np.float64)
    error = np.random.default_rng().random(10)

    # mean_0, error_0, mean_1, error_1, ...
    data = chain.from_iterable(zip(mean, error))
    dim = 2

    script = Data(data, dim).set_title("Numerical results").plot_later("my_identifier")
    print(f"wrote {script}")


if __name__ == "__main__":
    main()
