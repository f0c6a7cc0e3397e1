"""
View and projection matrices, world-space frustum corners.

Convention: right-handed view space, the camera looks along -Z,
points are column vectors (clip = M @ p). The clip-space depth range is
chosen by ClipDepth.
"""

from __future__ import annotations

import math

import numpy

from geomkit import log
from geomkit.config import (
    DEFAULT_TOLERANCES,
    ClipDepth,
    MatrixLayout,
    Tolerances,
)
from geomkit.errors import DegenerateGeometryError
from geomkit.util import as_matrix, as_vector, normalize

# Clip-space cube corners. Bit 0 selects Y, bit 1 selects X, bit 2 selects
# far depth; the per-face index table of Frustum relies on this order.
CLIP_CORNERS_XY = numpy.array([
    [-1.0, -1.0],
    [-1.0, 1.0],
    [1.0, -1.0],
    [1.0, 1.0],
])


def clip_corners(depth: ClipDepth = ClipDepth.ZERO_TO_ONE) -> numpy.ndarray:
    """
    8 углов куба отсечения в однородных координатах, (8, 4).

    Порядок: 0..3 - ближняя грань, 4..7 - дальняя;
    внутри грани (-1,-1), (-1,1), (1,-1), (1,1).
    """
    corners = numpy.ones((8, 4))
    for i, z in enumerate((depth.near, 1.0)):
        corners[i * 4:(i + 1) * 4, 0:2] = CLIP_CORNERS_XY
        corners[i * 4:(i + 1) * 4, 2] = z
    return corners


def perspective(fov_y: float, aspect: float, near: float, far: float,
                depth: ClipDepth = ClipDepth.ZERO_TO_ONE) -> numpy.ndarray:
    """
    Perspective projection matrix.

    fov_y: vertical field of view in radians
    aspect: width / height
    """
    if near <= 0.0 or far <= near:
        raise ValueError(f"perspective: expected 0 < near < far, got near={near}, far={far}")
    f = 1.0 / math.tan(fov_y * 0.5)
    proj = numpy.zeros((4, 4))
    proj[0, 0] = f / max(1e-6, aspect)
    proj[1, 1] = f
    if depth is ClipDepth.ZERO_TO_ONE:
        proj[2, 2] = far / (near - far)
        proj[2, 3] = -(far * near) / (far - near)
    else:
        proj[2, 2] = -(far + near) / (far - near)
        proj[2, 3] = (-2 * far * near) / (far - near)
    proj[3, 2] = -1.0
    return proj


def orthographic(left: float, right: float, bottom: float, top: float,
                 near: float, far: float,
                 depth: ClipDepth = ClipDepth.ZERO_TO_ONE) -> numpy.ndarray:
    """
    Формула ортографической проекции (для NEGATIVE_ONE_TO_ONE):
        [2/(r-l),    0,       0,    -(r+l)/(r-l)]
        [   0,    2/(t-b),    0,    -(t+b)/(t-b)]
        [   0,       0,   -2/(f-n), -(f+n)/(f-n)]
        [   0,       0,       0,          1     ]
    """
    lr = right - left
    tb = top - bottom
    fn = far - near
    if lr == 0 or tb == 0 or fn == 0:
        raise ValueError("orthographic: degenerate view volume")

    proj = numpy.zeros((4, 4))
    proj[0, 0] = 2.0 / lr
    proj[1, 1] = 2.0 / tb
    proj[0, 3] = -(right + left) / lr
    proj[1, 3] = -(top + bottom) / tb
    if depth is ClipDepth.ZERO_TO_ONE:
        proj[2, 2] = -1.0 / fn
        proj[2, 3] = -near / fn
    else:
        proj[2, 2] = -2.0 / fn
        proj[2, 3] = -(far + near) / fn
    proj[3, 3] = 1.0
    return proj


def look_at(eye, target, up=(0.0, 1.0, 0.0)) -> numpy.ndarray:
    """
    View matrix of a camera at eye looking at target.

    Rows 0, 1, 2 hold the camera axes (right, up, -forward).
    """
    eye = as_vector(eye)
    target = as_vector(target)
    up = as_vector(up)

    forward = normalize(target - eye)
    if abs(numpy.dot(forward, normalize(up))) > 0.999:
        raise DegenerateGeometryError("look_at: up is parallel to the view direction")
    right = normalize(numpy.cross(forward, up))
    true_up = numpy.cross(right, forward)

    view = numpy.eye(4)
    view[0, 0:3] = right
    view[1, 0:3] = true_up
    view[2, 0:3] = -forward
    view[0, 3] = -numpy.dot(right, eye)
    view[1, 3] = -numpy.dot(true_up, eye)
    view[2, 3] = numpy.dot(forward, eye)
    return view


def frustum_corners(matrix: numpy.ndarray,
                    depth: ClipDepth = ClipDepth.ZERO_TO_ONE,
                    layout: MatrixLayout = MatrixLayout.COLUMN_VECTORS,
                    tolerances: Tolerances = DEFAULT_TOLERANCES) -> numpy.ndarray:
    """
    Вычисляет 8 углов frustum в world space.

    Инвертируем матрицу projection @ view и переводим углы куба отсечения
    обратно в world space с перспективным делением на w.

    Возвращает:
        (8, 3) array в порядке clip_corners()
    """
    m = layout.to_column_vectors(as_matrix(matrix))
    try:
        inv = numpy.linalg.inv(m)
    except numpy.linalg.LinAlgError as e:
        raise DegenerateGeometryError("frustum: view-projection matrix is singular") from e

    world_h = clip_corners(depth).astype(m.dtype) @ inv.T
    w = world_h[:, 3]
    if numpy.any(numpy.abs(w) < tolerances.homogeneous_w):
        log.warn(f"frustum: corner at infinity, w = {w}")
        raise DegenerateGeometryError("frustum: corner cannot be perspective-divided (w == 0)")
    return world_h[:, :3] / w[:, None]
