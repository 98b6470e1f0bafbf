"""First-person fly camera, transforms and the GPU camera uniform."""

from __future__ import annotations

import math
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

Vec3 = tuple[float, float, float]
Quat = tuple[float, float, float, float]

_IDENTITY_QUAT: Quat = (0.0, 0.0, 0.0, 1.0)
_PITCH_LIMIT = math.radians(89.0)


class Key(Enum):
    """Keyboard keys the fly camera reacts to."""

    W = auto()
    A = auto()
    S = auto()
    D = auto()
    SPACE = auto()
    CONTROL_LEFT = auto()
    SHIFT_LEFT = auto()


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length == 0.0:
        return v
    return v / length


def _quat_mul(a: Quat, b: Quat) -> Quat:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def _quat_to_mat3(q: Quat) -> np.ndarray:
    x, y, z, w = q
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def _mat3_to_quat(m: np.ndarray) -> Quat:
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0:
        s = math.sqrt(trace + 1.0) * 2
        q = ((m[2, 1] - m[1, 2]) / s, (m[0, 2] - m[2, 0]) / s,
             (m[1, 0] - m[0, 1]) / s, s / 4)
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2
        q = (s / 4, (m[0, 1] + m[1, 0]) / s, (m[0, 2] + m[2, 0]) / s,
             (m[2, 1] - m[1, 2]) / s)
    elif m[1, 1] > m[2, 2]:
        s = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2
        q = ((m[0, 1] + m[1, 0]) / s, s / 4, (m[1, 2] + m[2, 1]) / s,
             (m[0, 2] - m[2, 0]) / s)
    else:
        s = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2
        q = ((m[0, 2] + m[2, 0]) / s, (m[1, 2] + m[2, 1]) / s, s / 4,
             (m[1, 0] - m[0, 1]) / s)
    arr = _normalize(np.array(q, dtype=float))
    return tuple(float(c) for c in arr)  # type: ignore[return-value]


def _any_orthonormal(v: np.ndarray) -> np.ndarray:
    axis = np.zeros(3)
    axis[int(np.argmin(np.abs(v)))] = 1.0
    return _normalize(np.cross(v, axis))


def perspective_rh(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with a [0, 1] depth range."""
    if near <= 0 or far <= 0:
        raise ValueError("near and far must be positive")
    if aspect <= 0:
        raise ValueError("aspect must be positive")
    h = 1.0 / math.tan(0.5 * fov_y)
    w = h / aspect
    r = far / (near - far)
    m = np.zeros((4, 4))
    m[0, 0] = w
    m[1, 1] = h
    m[2, 2] = r
    m[2, 3] = r * near
    m[3, 2] = -1.0
    return m


def quat_from_euler_yxz(yaw: float, pitch: float, roll: float) -> Quat:
    """Quaternion (x, y, z, w) rotating by yaw about Y, then pitch about X, then roll about Z."""
    qy = (0.0, math.sin(yaw / 2), 0.0, math.cos(yaw / 2))
    qx = (math.sin(pitch / 2), 0.0, 0.0, math.cos(pitch / 2))
    qz = (0.0, 0.0, math.sin(roll / 2), math.cos(roll / 2))
    return _quat_mul(_quat_mul(qy, qx), qz)


@dataclass(frozen=True)
class Transform:
    """Translation, rotation (quaternion x, y, z, w) and scale."""

    translation: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = _IDENTITY_QUAT
    scale: Vec3 = (1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        for name, size in (("translation", 3), ("rotation", 4), ("scale", 3)):
            value = tuple(float(c) for c in getattr(self, name))
            if len(value) != size:
                raise ValueError(f"{name} must have {size} components")
            object.__setattr__(self, name, value)

    @classmethod
    def from_translation(cls, translation: Iterable[float]) -> Transform:
        return cls(translation=tuple(translation))  # type: ignore[arg-type]

    def looking_at(self, target: Iterable[float], up: Iterable[float]) -> Transform:
        """A copy rotated so that its -Z axis points at ``target``."""
        direction = np.asarray(tuple(target), dtype=float) - np.asarray(self.translation)
        if float(np.linalg.norm(direction)) == 0.0:
            direction = np.array([0.0, 0.0, -1.0])
        back = -_normalize(direction)
        up_vec = np.asarray(tuple(up), dtype=float)
        right = np.cross(up_vec, back)
        if float(np.linalg.norm(right)) < 1e-9:
            right = _any_orthonormal(back)
        right = _normalize(right)
        true_up = np.cross(back, right)
        rotation = _mat3_to_quat(np.column_stack([right, true_up, back]))
        return Transform(self.translation, rotation, self.scale)

    def to_matrix(self) -> np.ndarray:
        """4x4 affine matrix, indexed [row, column]."""
        m = np.identity(4)
        m[:3, :3] = _quat_to_mat3(self.rotation) * np.asarray(self.scale)
        m[:3, 3] = self.translation
        return m


@dataclass
class FlyCamera:
    """First-person fly camera driven by WASD and mouse look."""

    speed: float = 20.0
    sensitivity: float = 0.003
    yaw: float = 0.0
    pitch: float = 0.0
    boost_multiplier: float = 3.0

    def update(
        self,
        transform: Transform,
        dt: float,
        keys: Collection[Key],
        mouse_deltas: Iterable[tuple[float, float]],
        cursor_grabbed: bool,
    ) -> Transform:
        """Apply one frame of input; returns the moved transform.

        Mouse motion only turns the camera while the cursor is grabbed.
        """
        speed = self.speed * self.boost_multiplier if Key.SHIFT_LEFT in keys else self.speed

        if cursor_grabbed:
            for dx, dy in mouse_deltas:
                self.yaw -= dx * self.sensitivity
                self.pitch -= dy * self.sensitivity
            self.pitch = min(max(self.pitch, -_PITCH_LIMIT), _PITCH_LIMIT)

        sin_yaw, cos_yaw = math.sin(self.yaw), math.cos(self.yaw)
        sin_pitch, cos_pitch = math.sin(self.pitch), math.cos(self.pitch)
        forward = _normalize(np.array([-cos_pitch * sin_yaw, sin_pitch, -cos_pitch * cos_yaw]))
        right = _normalize(np.array([cos_yaw, 0.0, -sin_yaw]))
        up = np.array([0.0, 1.0, 0.0])

        moves = {
            Key.W: forward,
            Key.S: -forward,
            Key.D: right,
            Key.A: -right,
            Key.SPACE: up,
            Key.CONTROL_LEFT: -up,
        }
        velocity = sum((vec for key, vec in moves.items() if key in keys), np.zeros(3))
        velocity = _normalize(velocity)

        translation = np.asarray(transform.translation) + velocity * speed * dt
        rotation = quat_from_euler_yxz(self.yaw, self.pitch, 0.0)
        return Transform(tuple(translation), rotation, transform.scale)  # type: ignore[arg-type]


@dataclass
class CursorState:
    """Whether the window cursor is grabbed for mouse look."""

    grabbed: bool = False
    visible: bool = True

    def apply_input(self, left_just_pressed: bool, escape_just_pressed: bool) -> None:
        """Grab on left click, release on Escape (Escape wins when both occur)."""
        if left_just_pressed:
            self.grabbed = True
            self.visible = False
        if escape_just_pressed:
            self.grabbed = False
            self.visible = True


@dataclass(frozen=True, eq=False)
class CameraUniform:
    """Camera matrices as uploaded to the GPU, indexed [row, column]."""

    view: np.ndarray
    proj: np.ndarray
    inv_view_proj: np.ndarray
    camera_pos: Vec3 = field(default=(0.0, 0.0, 0.0))

    @classmethod
    def from_transform_and_projection(
        cls, transform: Transform, fov_y: float, aspect: float, near: float, far: float
    ) -> CameraUniform:
        view = np.linalg.inv(transform.to_matrix())
        proj = perspective_rh(fov_y, aspect, near, far)
        inv_view_proj = np.linalg.inv(proj @ view)
        return cls(view, proj, inv_view_proj, transform.translation)


def spawn_fly_camera() -> tuple[FlyCamera, Transform]:
    """The default camera, placed above the terrain looking down at its centre."""
    eye = np.array([256.0, 96.0, 300.0])
    target = np.array([256.0, 0.0, 256.0])
    forward = _normalize(target - eye)
    yaw = math.atan2(forward[0], forward[2])
    pitch = math.asin(forward[1])
    transform = Transform.from_translation(eye).looking_at(target, (0.0, 1.0, 0.0))
    return FlyCamera(yaw=yaw, pitch=pitch), transform