import random
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go

from models import ClusterResult


class Grapher:
    """Creates visualizations of spectral clustering results"""

    def plot_embedding(self, result: ClusterResult, output_path: Path):
        """Scatter the items on the first two embedding dimensions"""
        df = result.to_dataframe()
        if df.empty:
            print("No data available to plot.")
            return

        unique_labels = sorted(df['label'].unique())
        cluster_colors = self._generate_colors(unique_labels)

        fig = self._create_figure(df, unique_labels, cluster_colors)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(str(output_path), include_plotlyjs="cdn")
        print(f"Plot saved to {output_path}")

    def plot_eigenvalues(self, result: ClusterResult, output_path: Path):
        """Plot the retained eigenvalues in the order they were selected"""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig, ax = plt.subplots(figsize=(8, 5))
        ax.plot(np.arange(1, len(result.eigenvalues) + 1), result.eigenvalues, marker="o")
        ax.set_xlabel("Eigenvector")
        ax.set_ylabel("Eigenvalue")
        ax.set_title(f"Retained spectrum ({result.laplacian} Laplacian)")

        plt.tight_layout()
        plt.savefig(output_path, dpi=200)
        plt.close(fig)
        print(f"Saved plot to {output_path}")

    def _generate_colors(self, labels: list) -> dict:
        """Generate random colors for each cluster"""
        return {
            label: f"rgb({random.randint(0,255)},{random.randint(0,255)},{random.randint(0,255)})"
            for label in labels
        }

    def _create_figure(
        self,
        df,
        labels: list,
        colors: dict
    ) -> go.Figure:
        """Create Plotly figure with cluster traces"""
        fig = go.Figure()
        # a single retained eigenvector is drawn against zero
        y_column = 'eig_1' if 'eig_1' in df.columns else None

        for label in labels:
            cluster_df = df[df['label'] == label]
            fig.add_trace(go.Scatter(
                x=cluster_df['eig_0'],
                y=cluster_df[y_column] if y_column else np.zeros(len(cluster_df)),
                mode='markers',
                marker=dict(size=7, opacity=0.7, color=colors[label]),
                name=f"Cluster {label}",
                text=cluster_df.index,
                hovertemplate=(
                    "Item: %{text}<br>"
                    "eig_0: %{x}<br>"
                    "eig_1: %{y}<br>"
                    f"Cluster: {label}<extra></extra>"
                )
            ))

        fig.update_layout(
            title="Spectral embedding",
            xaxis_title="eig_0",
            yaxis_title="eig_1",
            template="plotly_white",
            width=900,
            height=700,
            legend_title="Clusters"
        )

        return fig
