import os
import sys
import time
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


# Import libraries for simulation
import tensorflow as tf
import numpy as np

if _suppress_messages:
    try:
        tf.get_logger().setLevel("ERROR")
        for handler in tf.get_logger().handlers:
            handler.setLevel("ERROR")
    except Exception:
        pass

# Imports for visualization
import matplotlib.pyplot as plt
from matplotlib.backend_bases import FigureManagerBase

from juliaset import (
    COLOR_FACTOR,
    DEFAULT_C,
    HEIGHT,
    MAX_ITERATIONS,
    WIDTH,
    JuliaSession,
    build,
    new_buffer,
)

log("TensorFlow version: %s" % tf.__version__)

# Run the escape-time iteration on the GPU when one is visible, otherwise on
# the CPU.
gpus = tf.config.list_physical_devices('GPU')
if gpus:
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
        DEVICE = '/GPU:0'
        log("GPU found, using %s" % gpus[0].name)
    except RuntimeError as e:
        if VERBOSE:
            print(e)
        DEVICE = '/CPU:0'
else:
    DEVICE = '/CPU:0'
    log("No GPU found, using CPU")

from argparse import ArgumentParser

WINDOW_TITLE = "Julia Set Viewer"


def build_parser():
    parser = ArgumentParser(description='Interactive Julia set viewer. Move the pointer to change c.')

    parser.add_argument('--width', type=int,
                        dest='width', help='window width in pixels',
                        metavar='WIDTH', default=WIDTH)

    parser.add_argument('--height', type=int,
                        dest='height', help='window height in pixels',
                        metavar='HEIGHT', default=HEIGHT)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iteration budget before a point counts as bounded',
                        metavar='MAX_ITERATIONS', default=MAX_ITERATIONS)

    parser.add_argument('--color-factor', type=int,
                        dest='color_factor', help='hue scale applied to escape counts',
                        metavar='COLOR_FACTOR', default=COLOR_FACTOR)

    parser.add_argument('--c-re', type=float,
                        dest='c_re', help='real part of c shown before the pointer moves',
                        metavar='C_RE', default=DEFAULT_C[0])

    parser.add_argument('--c-im', type=float,
                        dest='c_im', help='imaginary part of c shown before the pointer moves',
                        metavar='C_IM', default=DEFAULT_C[1])

    parser.add_argument('--no-clamp-pointer', dest='clamp_pointer', action='store_false',
                        help='Let pointer positions outside the window extrapolate c beyond the viewport.')

    parser.add_argument('--headless', action='store_true',
                        help='Render a single frame without opening a window and report statistics.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def validate_options(opt, parser: ArgumentParser) -> None:
    if opt.width <= 0 or opt.height <= 0:
        parser.error("--width and --height must be positive.")
    if opt.max_iterations <= 0:
        parser.error("--max-iterations must be positive.")
    if opt.color_factor <= 0:
        parser.error("--color-factor must be positive.")


class JuliaWindow:
    """Matplotlib host that presents a session's frames and feeds it pointer moves."""

    def __init__(self, session: JuliaSession):
        self.session = session
        self.failed = False
        viewport = session.viewport
        self.frame = new_buffer(viewport)

        dpi = 100
        self.fig = plt.figure(figsize=(viewport.width / dpi, viewport.height / dpi), dpi=dpi)
        manager = getattr(self.fig.canvas, "manager", None)
        if manager is not None:
            manager.set_window_title(WINDOW_TITLE)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()

        self.session.redraw(self.frame)
        self.image = self.ax.imshow(self.frame, interpolation='nearest')

        self.fig.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.fig.canvas.mpl_connect('close_event', self._on_close)

    def _on_motion(self, event):
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return
        # Image data coordinates put pixel centers on integers.
        c = self.session.on_pointer_move(event.xdata + 0.5, event.ydata + 0.5)
        log("c = (%.6f, %.6f)" % c)
        self.redraw()

    def _on_close(self, event):
        log("Window closed")

    def has_window(self) -> bool:
        # Without a display matplotlib falls back to a backend whose figures
        # get the plain base manager and never open a window.
        manager = getattr(self.fig.canvas, "manager", None)
        return manager is not None and type(manager) is not FigureManagerBase

    def redraw(self):
        self.session.redraw(self.frame)
        try:
            self.image.set_data(self.frame)
            # draw_idle only schedules the draw on GUI backends; draw now so
            # failures surface here instead of in the toolkit's callback.
            self.fig.canvas.draw()
            self.fig.canvas.flush_events()
        except (RuntimeError, ValueError) as exc:
            print(f"Failed to present frame: {exc}", file=sys.stderr)
            self.failed = True
            plt.close(self.fig)

    def run(self) -> int:
        plt.show()
        return 1 if self.failed else 0


def run_headless(session: JuliaSession) -> int:
    frame = new_buffer(session.viewport)
    start = time.perf_counter()
    counts = session.redraw(frame)
    elapsed = time.perf_counter() - start
    bounded = float(np.mean(counts == session.max_iterations))
    print("c = (%.6f, %.6f): %.1f%% bounded, rendered %dx%d in %.3fs" % (
        session.c[0], session.c[1], bounded * 100.0,
        session.viewport.width, session.viewport.height, elapsed))
    return 0


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)
    validate_options(opt, parser)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    viewport = build(opt.width, opt.height)
    log("Viewport x: [%.6g, %.6g], y: [%.6g, %.6g]" % (
        viewport.x_start, viewport.x_start + viewport.x_range,
        viewport.y_start - viewport.y_range, viewport.y_start))

    session = JuliaSession(
        viewport=viewport,
        c=(opt.c_re, opt.c_im),
        max_iterations=opt.max_iterations,
        color_factor=opt.color_factor,
        clamp_pointer=bool(opt.clamp_pointer),
        device=DEVICE,
    )

    if opt.headless:
        return run_headless(session)

    try:
        window = JuliaWindow(session)
    except (RuntimeError, ImportError) as exc:
        raise SystemExit(f"Could not create the viewer window: {exc}") from exc
    if not window.has_window():
        plt.close(window.fig)
        raise SystemExit(
            f"Could not create the viewer window: matplotlib backend '{plt.get_backend()}' "
            "cannot display one. Use --headless or set MPLBACKEND to an interactive backend."
        )
    return window.run()


if __name__ == '__main__':
    sys.exit(main())
