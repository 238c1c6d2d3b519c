from __future__ import annotations

from gnuexplore import Process


def main() -> None:
    times = [1.0, 10.0, 100.0]
    values = [1, 2, 4]
    Process(times, values).set_title("My Title").set_logx(-2).plot("my_serie_name")


if __name__ == "__main__":
    main()
