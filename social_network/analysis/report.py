"""
Text reports and plots for social network queries.

Generates:
- Connection trees
- Friend suggestion lists
- Influence rankings
- Degree distribution charts
"""

from typing import List, Dict, Optional, Any
import json

from ..network.graph import SocialGraph, Suggestion, Influence

NO_SUGGESTIONS = "No suggestions available."


class NetworkReporter:
    """
    Formats query results and draws charts for a social graph.

    Note: plotting needs the optional matplotlib dependency (the
    ``plot`` extra). Without it, plot methods return the plot data
    as a dict.
    """

    def __init__(self, graph: SocialGraph, output_dir: str = "."):
        """Initialize the reporter.

        Args:
            graph: The social graph to report on.
            output_dir: Directory path for saving output files. Defaults to
                current directory.
        """
        self.graph = graph
        self.output_dir = output_dir
        self._has_matplotlib = self._check_matplotlib()

    def _check_matplotlib(self) -> bool:
        """Check if matplotlib is available.

        Returns:
            True if matplotlib can be imported, False otherwise.
        """
        try:
            import matplotlib
            return True
        except ImportError:
            return False

    def format_connection_tree(self, user_id: int, max_depth: int = 2) -> List[str]:
        """Lines of the connection tree rooted at a user."""
        return self.graph.display_connections_recursive(user_id, max_depth)

    def format_suggestions(
        self,
        user_id: int,
        suggestions: Optional[List[Suggestion]] = None,
    ) -> List[str]:
        """Format friend suggestions for a user.

        Args:
            user_id: The user the suggestions are for.
            suggestions: Precomputed suggestions. Computed from the graph
                when omitted.

        Returns:
            A header line followed by one line per suggestion, or the
            no-suggestions message when there are none.
        """
        if suggestions is None:
            suggestions = self.graph.suggest_friends(user_id)

        user = self.graph.get_user(user_id)
        name = user.name if user else ""
        lines = [f"Suggested friends for {name} based on mutual connections:"]
        for suggestion in suggestions:
            lines.append(
                f" - {self.graph.describe(suggestion.user_id)}, "
                f"Mutual Friends: {suggestion.mutual_count}"
            )
        if not suggestions:
            lines.append(NO_SUGGESTIONS)
        return lines

    def format_influential_users(
        self,
        ranking: Optional[List[Influence]] = None,
        top: Optional[int] = None,
    ) -> List[str]:
        """Format the influence ranking, optionally cut to the top N."""
        if ranking is None:
            ranking = self.graph.influential_users()
        if top is not None:
            ranking = ranking[:top]

        lines = ["Influential users based on the number of connections:"]
        for entry in ranking:
            lines.append(
                f" - {self.graph.describe(entry.user_id)} "
                f"with {entry.connection_count} connections."
            )
        return lines

    def degree_distribution(self) -> Dict[int, int]:
        """Map each degree to the number of users having it."""
        distribution: Dict[int, int] = {}
        for entry in self.graph.influential_users():
            count = entry.connection_count
            distribution[count] = distribution.get(count, 0) + 1
        return dict(sorted(distribution.items()))

    def plot_degree_distribution(
        self,
        save_path: Optional[str] = None,
    ) -> Optional[Any]:
        """Plot how many users have each number of connections.

        Args:
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure if matplotlib is available, otherwise
            returns the data as a dict for external plotting.
        """
        distribution = self.degree_distribution()
        data = {
            "degrees": list(distribution.keys()),
            "user_counts": list(distribution.values()),
        }

        if not self._has_matplotlib:
            return data

        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(10, 6))

        ax.bar(data["degrees"], data["user_counts"], color='steelblue', alpha=0.8)
        ax.set_xlabel('Connections')
        ax.set_ylabel('Users')
        ax.set_title('Degree Distribution')
        ax.grid(True, alpha=0.3, axis='y')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)

        return fig

    def export_plot_data(
        self,
        data: Dict[str, Any],
        filepath: str,
    ) -> None:
        """Export plot data to JSON for external visualization.

        Args:
            data: Dictionary containing plot data to export.
            filepath: Path to the output JSON file.
        """
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2, default=str)

    def create_summary_report(
        self,
        top: int = 5,
        save_path: Optional[str] = None,
    ) -> str:
        """Create a text summary of the network.

        Args:
            top: Number of most connected users to list.
            save_path: Optional file path to save the text report.

        Returns:
            The formatted report as a string.
        """
        graph = self.graph
        ranking = graph.influential_users()
        total_degree = sum(entry.connection_count for entry in ranking)
        avg_degree = total_degree / graph.user_count if graph.user_count else 0.0
        isolated = sum(1 for entry in ranking if entry.connection_count == 0)

        lines = [
            "=" * 60,
            "SOCIAL NETWORK SUMMARY",
            "=" * 60,
            "",
            "NETWORK STATISTICS",
            "-" * 40,
            f"Users: {graph.user_count}",
            f"Connections: {graph.edge_count}",
            f"Avg Connections per User: {avg_degree:.2f}",
            f"Isolated Users: {isolated}",
            "",
        ]

        if ranking:
            lines.append("Most Connected Users:")
            for entry in ranking[:top]:
                lines.append(f"  - {graph.describe(entry.user_id)}: "
                             f"{entry.connection_count}")

        lines.extend([
            "",
            "=" * 60,
            "END OF REPORT",
            "=" * 60,
        ])

        report = "\n".join(lines)

        if save_path:
            with open(save_path, 'w') as f:
                f.write(report)

        return report

    def __repr__(self) -> str:
        """Return string representation of the reporter.

        Returns:
            String indicating matplotlib availability status.
        """
        return f"NetworkReporter(matplotlib={'available' if self._has_matplotlib else 'not available'})"
