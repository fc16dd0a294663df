"""
Trace Exporter - Exports simulation traces to JSON, CSV and animated GIF
"""

import csv
import json
from pathlib import Path
from typing import List, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .trace import SimulationTrace


class TraceExporter:
    """Exports simulation traces to various formats"""

    FORMATS = ('json', 'csv', 'gif')

    @classmethod
    def export(cls, trace: SimulationTrace, path: str | Path, format: str = 'json', **kwargs) -> Path:
        """Export in the named format"""
        if format == 'json':
            return cls.to_json(trace, path)
        elif format == 'csv':
            return cls.to_csv(trace, path)
        elif format == 'gif':
            return cls.to_gif(trace, path, **kwargs)
        raise ValueError(f"Unknown format: {format}")

    @classmethod
    def to_json(cls, trace: SimulationTrace, path: str | Path) -> Path:
        """Export the full trace with metadata"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not trace.samples:
            raise ValueError("No samples to export")

        with open(path, 'w') as f:
            json.dump(trace.to_dict(), f, indent=2)

        return path

    @classmethod
    def to_csv(cls, trace: SimulationTrace, path: str | Path) -> Path:
        """One row per frame: time, anchor, bob and output components"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not trace.samples:
            raise ValueError("No samples to export")

        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['time', 'anchor_x', 'anchor_y', 'bob_x', 'bob_y', 'output_x', 'output_y'])
            for s in trace.samples:
                writer.writerow([
                    s.time,
                    s.anchor.x, s.anchor.y,
                    s.bob.x, s.bob.y,
                    s.output.x, s.output.y,
                ])

        return path

    @classmethod
    def to_gif(
        cls,
        trace: SimulationTrace,
        path: str | Path,
        size: int = 160,
        padding: int = 12,
        duration: int = None,
        loop: int = 0
    ) -> Path:
        """
        Render the rod from anchor to bob for every frame.

        Args:
            trace: Trace to draw
            path: Output GIF path
            size: Square canvas size in pixels
            padding: Margin around the motion bounds
            duration: Frame duration in ms (default: trace dt)
            loop: GIF loop count (0 = forever)
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not trace.samples:
            raise ValueError("No samples to export")

        if duration is None:
            duration = max(int(round(trace.dt * 1000)), 10)

        to_canvas = cls._fit_transform(trace, size, padding)

        images = []
        for s in trace.samples:
            img = Image.new('RGB', (size, size), (24, 24, 32))
            draw = ImageDraw.Draw(img)

            anchor = to_canvas(s.anchor.to_tuple())
            bob = to_canvas(s.bob.to_tuple())

            draw.line([anchor, bob], fill=(200, 200, 220), width=2)
            draw.ellipse(cls._dot(anchor, 3), fill=(255, 120, 80))
            draw.ellipse(cls._dot(bob, 5), fill=(120, 200, 255))

            images.append(img.convert('P', palette=Image.Palette.ADAPTIVE, colors=16))

        images[0].save(
            path,
            save_all=True,
            append_images=images[1:],
            duration=duration,
            loop=loop,
        )

        return path

    @staticmethod
    def _fit_transform(trace: SimulationTrace, size: int, padding: int):
        """World -> canvas mapping that keeps every anchor and bob in view"""
        points = np.vstack([trace.anchors, trace.bobs])
        lo = points.min(axis=0)
        hi = points.max(axis=0)
        extent = max(float((hi - lo).max()), 1e-6)
        scale = (size - 2 * padding) / extent
        center = (lo + hi) / 2.0

        def to_canvas(point: Tuple[float, float]) -> Tuple[float, float]:
            return (
                size / 2.0 + (point[0] - center[0]) * scale,
                size / 2.0 + (point[1] - center[1]) * scale,
            )

        return to_canvas

    @staticmethod
    def _dot(center: Tuple[float, float], radius: float) -> List[float]:
        cx, cy = center
        return [cx - radius, cy - radius, cx + radius, cy + radius]
