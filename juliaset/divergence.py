"""Escape-time iteration of the quadratic Julia recurrence."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

HORIZON_SQUARED = 4.0
MAX_ITERATIONS = 10


def escape(z0: tuple[float, float], c: tuple[float, float], max_iter: int) -> int:
    """Count iterations of ``z <- z*z + c`` until ``|z| > 2`` or ``max_iter``.

    A result equal to ``max_iter`` means the point stayed bounded.
    """

    px, py = float(z0[0]), float(z0[1])
    c_re, c_im = float(c[0]), float(c[1])
    count = 0
    while px * px + py * py <= HORIZON_SQUARED and count < max_iter:
        tmp = px * px - py * py + c_re
        py = 2.0 * px * py + c_im
        px = tmp
        count += 1
    return count


@tf.function
def _julia_step(
    zx: tf.Tensor, zy: tf.Tensor, c_re: tf.Tensor, c_im: tf.Tensor, ns: tf.Tensor, active: tf.Tensor
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that has not escaped by one iteration."""

    zx_new = zx * zx - zy * zy + c_re
    zy_new = 2.0 * zx * zy + c_im
    zx = tf.where(active, zx_new, zx)
    zy = tf.where(active, zy_new, zy)
    ns = ns + tf.cast(active, tf.int32)
    horizon = tf.constant(HORIZON_SQUARED, dtype=zx.dtype)
    new_active = tf.logical_and(active, zx * zx + zy * zy <= horizon)
    return zx, zy, ns, new_active


@tf.function
def _julia_run(
    zx: tf.Tensor, zy: tf.Tensor, c_re: tf.Tensor, c_im: tf.Tensor, max_iterations: tf.Tensor
) -> tf.Tensor:
    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(zx, tf.int32)
    horizon = tf.constant(HORIZON_SQUARED, dtype=zx.dtype)
    active = zx * zx + zy * zy <= horizon

    def cond(i, zx, zy, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zx, zy, ns, active):
        zx, zy, ns, active = _julia_step(zx, zy, c_re, c_im, ns, active)
        return i + 1, zx, zy, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, zx, zy, ns, active))
    return ns


def escape_counts(
    zx: np.ndarray,
    zy: np.ndarray,
    c: tuple[float, float],
    max_iter: int,
    *,
    device: Optional[str] = None,
) -> np.ndarray:
    """Vectorized :func:`escape` over arrays of starting points."""

    # c and max_iter go in as tensors so a moving pointer does not retrace.
    c_re = tf.constant(float(c[0]), dtype=tf.float64)
    c_im = tf.constant(float(c[1]), dtype=tf.float64)
    max_iterations = tf.constant(int(max_iter), dtype=tf.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        zx_tf = tf.convert_to_tensor(np.asarray(zx, dtype=np.float64))
        zy_tf = tf.convert_to_tensor(np.asarray(zy, dtype=np.float64))
        ns = _julia_run(zx_tf, zy_tf, c_re, c_im, max_iterations)

    return ns.numpy()
