"""Per-tick ball integration: gravity, walls and peg bounces."""

import math
from dataclasses import dataclass, field, replace
from random import Random
from uuid import uuid4

from plinko.geometry import BoardGeometry

SPAWN_Y = -10.0


@dataclass(frozen=True)
class PhysicsConfig:
    """Integration constants, in board units per tick."""

    gravity: float = 0.2
    horizontal_speed: float = 0.8
    collision_radius: float = 5.0
    push_out: float = 6.0


@dataclass(frozen=True)
class Ball:
    """A ball in flight."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class LandingSignal:
    """Returned by :func:`step` when a ball falls through the floor."""

    ball: Ball
    final_x: float


def create_ball(geometry: BoardGeometry, rng: Random | None = None) -> Ball:
    """
    Create a ball just above the top row.

    The ball starts halfway between two neighbouring top-row pegs, chosen
    uniformly, with a small random horizontal velocity in [-1, 1).

    Args:
        geometry: Board to drop onto
        rng: Random source (module-level random if not provided)

    Returns:
        A new ball
    """
    rng = rng or Random()
    start_col = rng.randrange(geometry.column_count - 1) + 0.5
    return Ball(
        x=start_col * geometry.stride,
        y=SPAWN_Y,
        vx=(rng.random() - 0.5) * 2,
        vy=0.0,
    )


def reflect_walls(x: float, vx: float, board_width: float) -> tuple[float, float]:
    """
    Bounce off the side walls.

    A position outside ``[0, board_width]`` is clamped to the wall it crossed
    and the horizontal velocity is negated.
    """
    if x < 0:
        return 0.0, -vx
    if x > board_width:
        return board_width, -vx
    return x, vx


def step(
    ball: Ball,
    geometry: BoardGeometry,
    physics: PhysicsConfig | None = None,
    rng: Random | None = None,
) -> Ball | LandingSignal:
    """
    Advance a ball by one tick.

    Order: gravity, translation, wall reflection, floor check, peg
    collision. A peg hit replaces the velocity with a randomized push away
    from the peg centre; the vertical component is never negative.

    Args:
        ball: Current ball state
        geometry: Board layout
        physics: Integration constants
        rng: Random source for bounce jitter

    Returns:
        The updated ball, or a LandingSignal once it drops below the board
    """
    physics = physics or PhysicsConfig()
    rng = rng or Random()

    vx = ball.vx
    vy = ball.vy + physics.gravity
    x = ball.x + vx
    y = ball.y + vy

    x, vx = reflect_walls(x, vx, geometry.board_width)

    if y > geometry.board_height:
        return LandingSignal(ball=replace(ball, x=x, y=y, vx=vx, vy=vy), final_x=x)

    peg_x, peg_y, lattice_row = geometry.nearest_peg(x, y)
    if geometry.has_peg_row(lattice_row):
        dx = x - peg_x
        dy = y - peg_y
        if math.hypot(dx, dy) < physics.collision_radius:
            angle = math.atan2(dy, dx)
            vx = math.cos(angle) * physics.horizontal_speed * (rng.random() + 0.5)
            vy = abs(math.sin(angle) * physics.horizontal_speed * (rng.random() + 0.5))
            x = peg_x + math.cos(angle) * physics.push_out
            y = peg_y + math.sin(angle) * physics.push_out

    return replace(ball, x=x, y=y, vx=vx, vy=vy)
