"""Quaternion helpers for world transforms (x, y, z, w; X forward, Z up)."""

from __future__ import annotations

import math

from sceneport.models.assets import Quat, Vec3

FORWARD: Vec3 = (1.0, 0.0, 0.0)

_SINGULARITY_THRESHOLD = 0.4999995


def rotate_vector(q: Quat, v: Vec3) -> Vec3:
    """Rotate *v* by the unit quaternion *q*."""
    qx, qy, qz, qw = q
    vx, vy, vz = v
    # t = 2 * cross(q.xyz, v)
    tx = 2.0 * (qy * vz - qz * vy)
    ty = 2.0 * (qz * vx - qx * vz)
    tz = 2.0 * (qx * vy - qy * vx)
    return (
        vx + qw * tx + (qy * tz - qz * ty),
        vy + qw * ty + (qz * tx - qx * tz),
        vz + qw * tz + (qx * ty - qy * tx),
    )


def forward_vector(q: Quat) -> Vec3:
    return rotate_vector(q, FORWARD)


def _normalize_axis(angle: float) -> float:
    angle = math.fmod(angle, 360.0)
    if angle > 180.0:
        angle -= 360.0
    elif angle <= -180.0:
        angle += 360.0
    return angle


def quat_to_rotator(q: Quat) -> tuple[float, float, float]:
    """Return ``(pitch, yaw, roll)`` in degrees for quaternion *q*."""
    x, y, z, w = q
    singularity = z * x - w * y
    yaw_y = 2.0 * (w * z + x * y)
    yaw_x = 1.0 - 2.0 * (y * y + z * z)
    yaw = math.degrees(math.atan2(yaw_y, yaw_x))

    if singularity < -_SINGULARITY_THRESHOLD:
        pitch = -90.0
        roll = _normalize_axis(-yaw - 2.0 * math.degrees(math.atan2(x, w)))
    elif singularity > _SINGULARITY_THRESHOLD:
        pitch = 90.0
        roll = _normalize_axis(yaw - 2.0 * math.degrees(math.atan2(x, w)))
    else:
        pitch = math.degrees(math.asin(2.0 * singularity))
        roll = math.degrees(
            math.atan2(-2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
        )
    return (pitch, yaw, roll)


def quat_from_rotator(pitch: float, yaw: float, roll: float) -> Quat:
    """Inverse of :func:`quat_to_rotator` (degrees in, unit quaternion out)."""
    sp, cp = math.sin(math.radians(pitch) / 2), math.cos(math.radians(pitch) / 2)
    sy, cy = math.sin(math.radians(yaw) / 2), math.cos(math.radians(yaw) / 2)
    sr, cr = math.sin(math.radians(roll) / 2), math.cos(math.radians(roll) / 2)
    return (
        cr * sp * sy - sr * cp * cy,
        -cr * sp * cy - sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
        cr * cp * cy + sr * sp * sy,
    )
