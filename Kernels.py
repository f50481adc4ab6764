"""
3x3 kernel presets shared by the convolution scripts and the filter pipeline.
"""
import numpy as np


def _preset(rows):
    kernel = np.array(rows, dtype=float)
    kernel.setflags(write=False)
    return kernel


# Kernel presets
KERNEL_IDENTITY = _preset([[0,0,0],[0,1,0],[0,0,0]])
KERNEL_BOX_BLUR = _preset([[.11,.11,.11],[.11,.12,.11],[.11,.11,.11]])
KERNEL_GAUSSIAN = _preset([[.0625,.125,.0625],[.125,.25,.125],[.0625,.125,.0625]])
KERNEL_SHARPEN = _preset([[0,-1,0],[-1,5,-1],[0,-1,0]])
KERNEL_EMBOSS = _preset([[-2,-1,0],[-1,1,1],[0,1,2]])
KERNEL_EDGE = _preset([[-2,-2,-2],[-2,16,-2],[-2,-2,-2]])

# Directional gradients, named after the side that has to be brighter
KERNEL_SOBEL_TOP = _preset([[1,2,1],[0,0,0],[-1,-2,-1]])
KERNEL_SOBEL_BOTTOM = _preset([[-1,-2,-1],[0,0,0],[1,2,1]])
KERNEL_SOBEL_LEFT = _preset([[1,0,-1],[2,0,-2],[1,0,-1]])
KERNEL_SOBEL_RIGHT = _preset([[-1,0,1],[-2,0,2],[-1,0,1]])

KERNELS = {
    'identity': KERNEL_IDENTITY,
    'box_blur': KERNEL_BOX_BLUR,
    'gaussian_blur': KERNEL_GAUSSIAN,
    'sharpen': KERNEL_SHARPEN,
    'emboss': KERNEL_EMBOSS,
    'edge_detect': KERNEL_EDGE,
    'sobel_top': KERNEL_SOBEL_TOP,
    'sobel_bottom': KERNEL_SOBEL_BOTTOM,
    'sobel_left': KERNEL_SOBEL_LEFT,
    'sobel_right': KERNEL_SOBEL_RIGHT,
}

SOBEL_DIRECTIONS = ('sobel_top', 'sobel_bottom', 'sobel_left', 'sobel_right')


def get_kernel(name):
    """Look up a kernel preset by name (raises KeyError for unknown names)."""
    return KERNELS[name]


def check_kernel(kernel):
    """Return the kernel as a float array, rejecting anything that is not 3x3."""
    kernel = np.asarray(kernel, dtype=float)
    if kernel.shape != (3, 3):
        raise ValueError(f"Kernel must be 3x3, got shape {kernel.shape}")
    return kernel
