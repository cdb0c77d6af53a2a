"""A Whitted-style ray caster for scenes of transformed spheres.

This package renders scenes built from unit spheres placed by affine
transforms, lit by a single point light with Phong shading and hard shadows.
The reference pipeline runs in double-precision Python; an equivalent Taichi
kernel renders the same scenes in compiled single precision.

Subpackages:
    core: Tuples, colors, matrices, transforms, rays, canvas, and the
        Taichi render kernel
    geometry: The sphere primitive and intersection records
    materials: Phong material and lighting model
    scene: Lights, world composition, scene configuration and the showcase
        scene
    camera: Pinhole camera with the Python render loop
    preview: Image export and Matplotlib preview
"""

__version__ = "0.1.0"
