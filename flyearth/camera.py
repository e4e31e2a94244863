"""Orbit camera around the unit-sphere Earth, driven by mouse, scroll and keys."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np


def _vec(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).copy()


def _normalize(v: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return v / np.linalg.norm(v)


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix (column-vector convention)."""
    eye, center, up = _vec(eye), _vec(center), _vec(up)
    f = _normalize(center - eye)
    s = _normalize(np.cross(f, up))
    u = np.cross(s, f)
    return np.array(
        [
            [s[0], s[1], s[2], -np.dot(s, eye)],
            [u[0], u[1], u[2], -np.dot(u, eye)],
            [-f[0], -f[1], -f[2], np.dot(f, eye)],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [0, 1]."""
    tan_half = math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = far / (near - far)
    m[2, 3] = -(far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def rotate_about_axis(vector, angle: float, axis) -> np.ndarray:
    """Rotate a vector by an angle (radians) about a unit axis."""
    v, k = _vec(vector), _vec(axis)
    c, s = math.cos(angle), math.sin(angle)
    return v * c + np.cross(k, v) * s + k * np.dot(k, v) * (1.0 - c)


def angle_between(a, b) -> float:
    """Angle between two unit vectors, in radians."""
    return float(np.arccos(np.clip(np.dot(_vec(a), _vec(b)), -1.0, 1.0)))


@dataclass
class Ray:
    origin: np.ndarray
    direction: np.ndarray


class MouseButton(Enum):
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()


@dataclass
class InputState:
    """Window size and input for one frame.

    ``buttons_clicked`` holds buttons that went down this frame; ``keys_down``
    holds upper-case key names such as ``"W"``.
    """

    width: int
    height: int
    mouse_pos: tuple[float, float] = (0.0, 0.0)
    mouse_delta: tuple[float, float] = (0.0, 0.0)
    scroll: float = 0.0
    buttons_down: frozenset = field(default_factory=frozenset)
    buttons_clicked: frozenset = field(default_factory=frozenset)
    keys_down: frozenset = field(default_factory=frozenset)


class EarthCamera:
    """Camera orbiting the unit sphere at a variable height."""

    UP = np.array([0.0, 1.0, 0.0])
    MAX_LAT = 65.0
    MIN_HEIGHT = 1.15
    MAX_HEIGHT = 5.0

    def __init__(self) -> None:
        self.norm_pos = np.array([0.0, 0.0, 1.0])
        self.height = 1.5

        self.fov = 45.0
        self.speed = 1.0
        self.max_dragging_time = 0.2
        self.scroll_acc = 52.0
        self.angular_vel = 0.0
        self.angular_damping = 0.01
        self.mouse_controlled = False

        self.inc_t = 0.0
        self.rot_axis = self.UP.copy()
        self.first_mouse = np.zeros(2)
        self.last_mouse = np.zeros(2)

        self.view = look_at(self.height * self.norm_pos, np.zeros(3), self.UP)
        self.proj = perspective(math.radians(self.fov), 1.0, 0.05, 10.0)
        self.proj[1, 1] *= -1

    @property
    def position(self) -> np.ndarray:
        return self.norm_pos * self.height

    @staticmethod
    def _latitude(y: float) -> float:
        with np.errstate(invalid="ignore"):
            return float(np.degrees(np.arcsin(y)))

    def set_pos(self, new_pos) -> None:
        """Move to a unit position, clamping latitude; invalid positions are ignored."""
        new_pos = _vec(new_pos)
        lat = self._latitude(new_pos[1])
        while abs(lat) - self.MAX_LAT > 1e-5:
            if new_pos[0] == 0.0 and new_pos[2] == 0.0:
                return
            new_pos[1] = math.sin(math.radians(self.MAX_LAT)) * np.sign(new_pos[1])
            new_pos = _normalize(new_pos)
            lat = self._latitude(new_pos[1])

        if np.all(np.isfinite(new_pos)) and abs(np.linalg.norm(new_pos) - 1.0) < 1e-6:
            self.norm_pos = _normalize(new_pos)

    def update(self, window: InputState, dt: float) -> None:
        """Advance the camera by one frame of input."""
        mouse_pos = _vec(window.mouse_pos)
        mouse_delta = _vec(window.mouse_delta)

        self.mouse_controlled = False
        if MouseButton.LEFT in window.buttons_down:
            p = self.intersect_ray_unit_sphere(self.mouse_ray(window, mouse_pos))
            old_mouse = mouse_pos - mouse_delta
            if MouseButton.LEFT in window.buttons_clicked:
                self.inc_t = 0.0
                self.first_mouse = old_mouse
            self.mouse_controlled = True
            self.inc_t += dt

            if np.linalg.norm(mouse_delta) > 0:
                q = self.intersect_ray_unit_sphere(self.mouse_ray(window, old_mouse))
                self.last_mouse = mouse_pos
                angle = angle_between(p, q)
                self.rot_axis = _normalize(np.cross(p, q))
                self.angular_vel += angle
                self.set_pos(rotate_about_axis(self.norm_pos, angle, self.rot_axis))
        else:
            right = np.cross(self.UP, self.norm_pos)
            local_up = np.cross(self.norm_pos, right)
            new_pos = self.norm_pos.copy()
            step = self.speed * dt
            if "W" in window.keys_down:
                new_pos += local_up * step
            elif "S" in window.keys_down:
                new_pos -= local_up * step
            if "A" in window.keys_down:
                new_pos -= right * step
            elif "D" in window.keys_down:
                new_pos += right * step
            self.set_pos(new_pos)

        if abs(window.scroll) > 0 and not self.mouse_controlled:
            self.mouse_controlled = True
            scroll_speed = self.height * self.height * self.scroll_acc * window.scroll
            p = self.intersect_ray_unit_sphere(self.mouse_ray(window, mouse_pos))
            self.height = min(
                max(self.height - scroll_speed * dt, self.MIN_HEIGHT), self.MAX_HEIGHT
            )
            self.view = look_at(self.height * self.norm_pos, np.zeros(3), self.UP)
            q = self.intersect_ray_unit_sphere(self.mouse_ray(window, mouse_pos))
            angle = -angle_between(p, q)
            axis = _normalize(np.cross(p, q))
            self.set_pos(rotate_about_axis(self.norm_pos, angle, axis))

        if abs(self.angular_vel) > 0 and not self.mouse_controlled:
            if self.inc_t != 0:
                p = self.intersect_ray_unit_sphere(self.mouse_ray(window, self.first_mouse))
                q = self.intersect_ray_unit_sphere(self.mouse_ray(window, self.last_mouse))
                self.angular_vel = -angle_between(p, q) / self.inc_t
                self.rot_axis = _normalize(np.cross(p, q))
                if self.inc_t > self.max_dragging_time:
                    self.angular_vel = 0.0
                self.inc_t = 0.0

            self.set_pos(
                rotate_about_axis(self.norm_pos, self.angular_vel * dt, self.rot_axis)
            )
            self.angular_vel *= self.angular_damping ** (2 * dt)

        self.view = look_at(self.height * self.norm_pos, np.zeros(3), self.UP)
        if window.height != 0:
            self.proj = perspective(
                math.radians(self.fov), window.width / float(window.height), 0.05, 10.0
            )
            self.proj[1, 1] *= -1

    def mouse_ray(self, window: InputState, mouse_pos) -> Ray:
        """World-space ray through a window position."""
        mx, my = _vec(mouse_pos)
        x_ndc = (mx / window.width - 0.5) * 2.0
        y_ndc = (my / window.height - 0.5) * 2.0

        inv_vp = np.linalg.inv(self.proj @ self.view)
        start = inv_vp @ np.array([x_ndc, y_ndc, -1.0, 1.0])
        start /= start[3]
        end = inv_vp @ np.array([x_ndc, y_ndc, 0.0, 1.0])
        end /= end[3]
        return Ray(start[:3], _normalize(end[:3] - start[:3]))

    @staticmethod
    def intersect_ray_unit_sphere(ray: Ray) -> np.ndarray:
        """First hit of a ray on the unit sphere, or the zero vector on a miss."""
        origin, direction = _vec(ray.origin), _vec(ray.direction)
        b = float(np.dot(origin, direction))
        c = float(np.dot(origin, origin)) - 1.0
        if c > 0.0 and b > 0.0:
            return np.zeros(3)
        discr = b * b - c
        if discr < 0.0:
            return np.zeros(3)
        t = max(-b - math.sqrt(discr), 0.0)
        return origin + t * direction

    def lat_lon(self) -> tuple[float, float]:
        """Latitude and longitude of the camera, in degrees."""
        x, y, z = self.norm_pos
        lat = math.degrees(math.asin(y / float(np.linalg.norm(self.norm_pos))))
        lon = math.degrees(math.atan2(x, z))
        return lat, lon