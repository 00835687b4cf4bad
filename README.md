# softrender

Small renderers that run entirely on the CPU, written with numpy and Pillow:

- a **triangle rasterizer** with a depth buffer, perspective-correct depth
  interpolation and several fragment shaders (normal, Phong, texture, bump,
  displacement), fed by a Wavefront OBJ/MTL loader;
- **ray-tracing building blocks**: vectors, spheres, triangle meshes with a
  checkerboard pattern, point lights and a scene container;
- a **Bezier curve** drawer that evaluates curves with de Casteljau's
  algorithm.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command-line use

Two commands are installed.

### `softrender-raster`

Loads `spot_triangulated_good.obj` from a model folder, rasterizes it into a
700 x 700 image and writes the image to a file. The first argument is the
output file name (default `output.png`); the optional second argument picks
the fragment shader: `texture`, `normal`, `phong`, `bump` or `displacement`.
Without a shader name the displacement shader is used. The `bump` and
`displacement` shaders sample the height map `hmap.jpg`; the `texture` shader
samples `spot_texture.png`. Both are read from the model folder.

```
softrender-raster output.png phong --model-dir models/spot --angle 140
```

Options:

- `--model-dir` — folder holding the model and its textures
  (default `../models/spot/`);
- `--angle` — rotation about the vertical axis in degrees (default 140).

The command returns 1 and prints an error if the model or texture cannot be
loaded.

### `softrender-bezier`

Draws a curve through four control points, given as `X,Y`, marks each
control point with a white circle, draws the curve in red and saves the
result as a PNG image.

```
softrender-bezier 100,600 250,100 450,100 600,600 -o curve.png
```

Options:

- `-o`, `--output` — image to write (default `my_bezier_curve.png`);
- `--size` — image width and height in pixels (default 700);
- `--naive` — evaluate the cubic with the Bernstein formula instead of de
  Casteljau's algorithm.

## Library use

### Loading OBJ models

```python
from softrender.objloader import Loader

loader = Loader()
meshes = loader.load_file("models/cube.obj")
```

`Loader.load_file` returns the loaded meshes and also fills
`loaded_meshes`, `loaded_vertices`, `loaded_indices` and `loaded_materials`.
Faces with more than three vertices are triangulated by ear clipping
(`softrender.objloader.vertex_triangulation`), missing normals are generated
from the face, and materials referenced through `mtllib` are read from the
`.mtl` file next to the model with `Loader.load_materials`. Problems loading
a file raise `softrender.objloader.ObjLoadError`.

The value types (`Vector2`, `Vector3`, `Vertex`, `Material`, `Mesh`) and the
geometry and text helpers used by the loader live in `softrender.objmath`.

### Rasterizing

`softrender.rasterizer.Rasterizer` holds the frame and depth buffers. Its
`model`, `view` and `projection` matrices, its `texture` and its
`fragment_shader` are plain attributes. The matrices come from
`softrender.shading.get_model_matrix`, `get_view_matrix` and
`get_projection_matrix`; the fragment shaders live in `softrender.shading`
as well (`normal_fragment_shader`, `phong_fragment_shader`,
`texture_fragment_shader`, `bump_fragment_shader`,
`displacement_fragment_shader`). Call `clear(Buffers.COLOR | Buffers.DEPTH)`
before `draw`.

`softrender.raster_cli.triangles_from_meshes` turns loaded meshes into
`softrender.triangle.Triangle` objects and `softrender.raster_cli.render`
draws them into an 8-bit RGB numpy image:

```python
from softrender.objloader import Loader
from softrender.raster_cli import render, triangles_from_meshes
from softrender.shading import normal_fragment_shader

meshes = Loader().load_file("models/spot/spot_triangulated_good.obj")
image = render(triangles_from_meshes(meshes), normal_fragment_shader, size=256)
```

Textures are loaded with `softrender.texture.Texture.from_file` and sampled
with `Texture.get_color(u, v)`.

### Ray-tracing scenes

`softrender.vector` provides `Vector3f`, `Vector2f`, `MaterialType`,
`normalize`, `dot_product`, `cross_product`, `lerp`, `clamp` and
`solve_quadratic`. `softrender.objects` provides `Sphere`, `MeshTriangle`,
`Light` and `ray_triangle_intersect`; every object's `intersect(orig,
direction)` returns the hit distance, triangle index and barycentric
coordinates, or `None` on a miss. `softrender.scene.Scene` collects objects
and lights through `Scene.add` and holds the image size, field of view,
background colour, recursion depth and epsilon.

```python
from softrender.objects import Light, Sphere
from softrender.scene import Scene
from softrender.vector import Vector3f

scene = Scene(320, 240)
scene.add(Sphere(Vector3f(-1, 0, -12), 2))
scene.add(Light(Vector3f(-20, 70, 20), Vector3f(0.5)))
hit = scene.objects[0].intersect(Vector3f(0), Vector3f(0, 0, -1))
```

## What the package does not do

The package has no ray-tracing renderer: nothing here casts rays through a
`Scene`, computes reflection, refraction, shadows or Fresnel mixing, or
writes a ray-traced image. Only the scene description and the ray–object
intersection tests are provided.

There is no interactive window either: both commands render once and write
an image file.