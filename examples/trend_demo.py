from __future__ import annotations

import matplotlib.pyplot as plt

from src import (
    find_max_influence_path,
    format_influence,
    path_to_string,
    draw_path_matplotlib,
    setup_logging,
    trend_propagation_example,
)


def main() -> None:
    setup_logging(level="DEBUG")

    graph = trend_propagation_example()
    print("Nodes:", graph.nodes)
    print("Communities:", graph.communities)

    for penalty in (1.0, 0.9, 0.5):
        result = find_max_influence_path(graph, "Alice", "Eve", penalty=penalty)
        print(
            f"penalty={penalty}: {path_to_string(result.path)} "
            f"influence={format_influence(result.influence)} switches={result.switches}"
        )

    result = find_max_influence_path(graph, "Alice", "Eve", penalty=0.9)
    fig, _, _ = draw_path_matplotlib(
        graph,
        path=result.path,
        title=f"Alice → Eve, influence {format_influence(result.influence)}",
    )
    plt.show()


if __name__ == "__main__":
    main()
