import logging
from collections import Counter, deque

import matplotlib.pyplot as plt
import numpy as np


class EpisodeStatistics:
    def __init__(self, total: int, block: int = 0, limit: int = 0):
        """
        Args:
            total: Number of episodes to play
            block: Summary interval in episodes (0 means once, at the end)
            limit: Number of finished episodes to retain (0 means all)
        """
        self.total = total
        self.block = block if block > 0 else max(total, 1)
        self.limit = limit
        self.records = deque(maxlen=limit if limit > 0 else None)
        self.count = 0
        self.scores = []
        self.max_tiles = []

    def add(self, episode) -> None:
        self.records.append(episode)
        self.count += 1
        self.scores.append(episode.score)
        self.max_tiles.append(episode.max_tile())
        if self.count % self.block == 0:
            self.summary()

    def is_finished(self) -> bool:
        return self.count >= self.total

    def block_summary(self):
        """Aggregate figures over the most recent block."""
        size = min(self.block, self.count)
        scores = np.array(self.scores[-size:])
        tiles = self.max_tiles[-size:]
        recent = list(self.records)[-size:]
        steps = sum(ep.step_count() for ep in recent)
        seconds = sum(ep.duration() for ep in recent)
        return {
            "count": self.count,
            "avg_score": float(scores.mean()) if size else 0.0,
            "max_score": int(scores.max()) if size else 0,
            "ops": steps / seconds if seconds > 0 else 0.0,
            "tile_counts": Counter(tiles),
            "size": size,
        }

    def summary(self) -> None:
        stats = self.block_summary()
        logging.info(
            f"{stats['count']}\tavg = {stats['avg_score']:.0f}, max = {stats['max_score']}, "
            f"ops = {stats['ops']:.0f}"
        )
        # Share of games reaching at least each tile, largest first
        reached = 0
        for tile, count in sorted(stats["tile_counts"].items(), reverse=True):
            reached += count
            logging.info(
                f"\t{tile}\t{reached / stats['size'] * 100:.1f}%\t({count / stats['size'] * 100:.1f}%)"
            )

    def plot_progress(self, path: str = "training_progress.png") -> None:
        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(15, 5))
        ax1.plot(self.scores, alpha=0.6, label="Episode Score")
        if len(self.scores) >= self.block:
            window = np.ones(self.block) / self.block
            ax1.plot(
                np.arange(self.block - 1, len(self.scores)),
                np.convolve(self.scores, window, mode="valid"),
                linewidth=2,
                label=f"Mean over {self.block}",
            )
        ax1.set_title("Score over Time")
        ax1.set_xlabel("Episode")
        ax1.set_ylabel("Score")
        ax1.legend()
        ax2.plot(self.max_tiles)
        if self.max_tiles:
            ax2.set_yscale("log", base=2)
        ax2.set_title("Maximum Tile Achieved")
        ax2.set_xlabel("Episode")
        ax2.set_ylabel("Max Tile")
        plt.tight_layout()
        plt.savefig(path)
        plt.close(fig)
        logging.info(f"Saved training progress plot to {path}")
