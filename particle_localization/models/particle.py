"""
Particle entity and unicycle motion model.

State: p = [x, y, heading, weight]
- (x, y): position in world frame
- heading: direction of travel in radians, kept in [0, 2*pi)
- weight: unnormalized importance weight (>= 0)

Control: u = [distance, angle_delta]
- the particle first turns by angle_delta, then drives distance along
  the new heading
"""

import math

from ..common.angles import normalize_heading


class Particle:
    """
    A single pose hypothesis.

    The same class models the ground-truth actor in simulations, so the
    filter and the simulated robot share one motion model.

    Parameters
    ----------
    x, y : float
        Position
    heading : float, optional
        Heading in radians (default: 0)
    weight : float, optional
        Importance weight (default: 0, i.e. unweighted)
    """

    __slots__ = ('x', 'y', 'heading', 'weight')

    def __init__(self, x, y, heading=0.0, weight=0.0):
        self.x = float(x)
        self.y = float(y)
        self.heading = float(heading)
        self.weight = float(weight)

    def move(self, distance, angle_delta):
        """
        Turn by ``angle_delta`` then drive ``distance`` along the new heading.

        Parameters
        ----------
        distance : float
            Distance travelled
        angle_delta : float
            Heading change in radians; must lie within (-2*pi, 2*pi)
        """
        self.heading = normalize_heading(self.heading + angle_delta)
        self.x += distance * math.cos(self.heading)
        self.y += distance * math.sin(self.heading)

    def update_weight(self, weight):
        if weight < 0:
            raise ValueError(f"Particle weight must be non-negative, got {weight}")
        self.weight = float(weight)

    def as_tuple(self):
        return (self.x, self.y, self.heading, self.weight)

    def __repr__(self):
        return (f"Particle(x={self.x:.4f}, y={self.y:.4f}, "
                f"heading={self.heading:.4f}, weight={self.weight:.4g})")
