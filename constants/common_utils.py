import numpy as np


def rotation_z(rad: float) -> np.ndarray:
    """
    Compute rotation matrix for a rotation around the Z-axis.

    Args:
        rad: Rotation angle in radians
    Returns:
        3x3 rotation matrix
    """
    cos_rad = np.cos(rad)
    sin_rad = np.sin(rad)
    return np.array(
        [
            [cos_rad, sin_rad, 0],
            [-sin_rad, cos_rad, 0],
            [0, 0, 1],
        ]
    )


def wrap_two_pi(rad: float) -> float:
    """Wrap an angle to [0, 2pi)."""
    return float(np.mod(rad, 2.0 * np.pi))


def require_finite(name: str, *values: float) -> None:
    """Raise ValueError if any of ``values`` is NaN or infinite."""
    if not np.all(np.isfinite(np.asarray(values, dtype=float))):
        raise ValueError(f"{name} must be finite, got {values}")
