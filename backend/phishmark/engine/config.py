"""Engine configuration — every tunable constant of the generator.

Lengths marked "ref px" are expressed on the 800px reference canvas and get
multiplied by the resolution multiplier (size / 800).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Controls style probabilities and the geometry of every layout."""

    # Reference canvas edge; res multiplier = size / reference_size
    reference_size: float = 800.0

    # Stroke width bounds (ref px)
    min_stroke: float = 2.0
    max_stroke: float = 50.0
    # Monochrome thins strokes by uniform(low, high)
    mono_stroke_scale: tuple[float, float] = (0.2, 0.3)

    # Style probabilities (each an independent coin flip)
    p_gradient: float = 0.5
    p_monochrome: float = 0.05
    p_shapes: float = 0.2
    p_rotated_squares: float = 0.5
    p_continuous: float = 0.5
    p_filled: float = 0.1
    p_curl: float = 0.25
    p_shadow: float = 0.25
    p_crossed: float = 0.1
    p_zigzag: float = 0.2
    p_color_per_shape: float = 0.5
    p_bordered: float = 0.5

    # Virtual canvas: 20% margin on every side (ref px)
    virtual_min: float = -160.0
    virtual_max: float = 960.0
    # Field cell edge (ref px)
    field_resolution: float = 11.2
    # Noise coordinates per field cell
    noise_scale: float = 0.005
    # Octave count drawn from floor(uniform(low, high)); falloff from uniform
    noise_octaves: tuple[int, int] = (2, 10)
    noise_falloff: tuple[float, float] = (0.5, 0.9)
    curl_max_octaves: int = 5
    # Non-continuous angle step = pi / floor(uniform(low, high))
    angle_step_divisor: tuple[int, int] = (3, 10)

    # Standard curves: steps = floor(a * stroke/res + b)
    curve_steps_slope: float = 5.8
    curve_steps_offset: float = 108.0
    # Step length = size / curve_step_divisor, or shape-based when shapes are on
    curve_step_divisor: float = 1000.0
    shape_step_stroke_ratio: float = 0.2
    shape_step_offset: float = 3.0  # ref px
    # Curl curves: steps = floor(stroke/res + offset), step = curl_step (ref px)
    curl_steps_offset: float = 10.0
    curl_step: float = 5.0
    # Zig-zag parity sample scale
    zigzag_scale: float = 1000.0

    # Shadows
    shadow_offset: float = 3.0  # ref px
    shadow_scale_range: tuple[float, float] = (0.8, 1.2)

    # Grid layout spacing (ref px), mapped from stroke range
    grid_spacing: tuple[float, float] = (5.0, 50.0)
    grid_mono_min_spacing: float = 15.0

    # Uniform layout curve count, mapped from stroke range (thin -> many)
    random_count: tuple[float, float] = (200.0, 2000.0)

    # Poisson layout
    poisson_radius: tuple[float, float] = (20.0, 100.0)  # ref px
    poisson_k: int = 30
    poisson_extent: float = 1.5  # accelerator covers extent * size per axis

    # Spaced layout
    spaced_sep_ratio: float = 2.5
    spaced_seed_every: int = 2
    spaced_step: float = 8.0  # ref px
    spaced_min_curve_length: float = 50.0  # ref px
    spaced_max_iterations: int = 2000
    # Hard cap on steps per half-curve (streamlines can cycle between two cells)
    spaced_max_steps: int = 2000
    screen_epsilon: float = 0.001  # ref px

    # Shapes
    shape_border_width: float = 1.0  # ref px
    gradient_jitter_ratio: float = 0.5  # +/- size * ratio


DEFAULT_CONFIG = EngineConfig()
