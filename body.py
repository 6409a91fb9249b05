import numpy as np


def radius_for_mass(mass, scale):
    """Cube-root radius of a constant-density disk, used only for drawing."""
    return np.cbrt(mass) / scale


class Body:
    def __init__(self, position, velocity, mass, radius, dtype=np.float32):
        """Initialize a body with position, velocity, mass and radius."""
        self.position = np.array(position, dtype=dtype)  # 2D position vector
        self.velocity = np.array(velocity, dtype=dtype)  # 2D velocity vector
        if self.position.shape != (2,) or self.velocity.shape != (2,):
            raise ValueError("Position and velocity must be 2D vectors")
        if not mass > 0:
            raise ValueError(f"Body mass must be positive, got {mass}")
        if not radius > 0:
            raise ValueError(f"Body radius must be positive, got {radius}")
        self.mass = float(mass)
        self.radius = float(radius)

    @classmethod
    def from_mass(cls, position, mass, radius_scale, velocity=(0.0, 0.0), dtype=np.float32):
        return cls(position, velocity, mass, radius_for_mass(mass, radius_scale), dtype=dtype)

    def kick(self, acceleration, dt):
        """Advance velocity by one step of the given acceleration."""
        self.velocity += (np.asarray(acceleration) * dt).astype(self.velocity.dtype)

    def drift(self, dt):
        """Advance position using the current velocity."""
        self.position += self.velocity * self.position.dtype.type(dt)

    def __repr__(self) -> str:
        return (f"Body(position={self.position.tolist()}, velocity={self.velocity.tolist()}, "
                f"mass={self.mass}, radius={self.radius})")
