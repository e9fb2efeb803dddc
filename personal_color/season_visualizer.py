import logging

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .palette import load_all_palettes  # noqa: E402

logger = logging.getLogger(__name__)

SEASON_PLOT_COLORS = {
    "spring": "#FFB347",
    "summer": "#7EC8E3",
    "autumn": "#C97F3D",
    "winter": "#6A5ACD",
}


def visualize_skin_position(skin_lab, save_path="skin_position.png", palettes=None, title=None):
    """
    Skin Lab position over the season palettes.
    Left: b* vs L* (yellow-blue axis), right: a* vs L* (red-green axis).
    """
    palettes = palettes or load_all_palettes()
    fig, axes = plt.subplots(1, 2, figsize=(12, 6), sharey=True)

    for ax, channel, label in ((axes[0], "b*", "b* (blue ← 0 → yellow)"),
                               (axes[1], "a*", "a* (green ← 0 → red)")):
        for season, df in palettes.items():
            ax.scatter(df[channel], df["L*"], s=40, alpha=0.6, label=season,
                       c=SEASON_PLOT_COLORS.get(season, "gray"))

        skin_value = skin_lab.b if channel == "b*" else skin_lab.a
        ax.scatter(skin_value, skin_lab.L, s=250, c="red", edgecolors="black",
                   marker="X", label="SKIN")

        ax.set_xlabel(label, fontsize=11)
        ax.set_xlim(-60, 80)
        ax.set_ylim(100, 0)
        ax.grid(True, linestyle="--", alpha=0.5)

    axes[0].set_ylabel("L* (lightness)", fontsize=11)
    axes[1].legend()
    fig.suptitle(title or "Skin Lab position inside season palettes", fontsize=13)
    fig.tight_layout()

    fig.savefig(str(save_path), dpi=150)
    plt.close(fig)

    logger.debug("skin position plot saved → %s", save_path)
    return save_path
