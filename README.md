# rigid2d

A small two-dimensional rigid body simulator in pure Python with no third-party
dependencies.

- Bodies are built from circles and convex polygons.
- Bodies collide with impulses and friction.
- Bodies can be joined by ropes, links, springs and cords.
- A scene can be drawn into an in-memory canvas that has a depth buffer.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `rigid2d.geometry`
  - `Vec2`: an immutable vector.
  - `Mat2`: a 2×2 matrix, with `rotation`, `det`, `inverse`, `abs` and `transform`.
  - `AABB`: a bounding box, with `union`, `expand` and `overlaps`.
  - `Rect`: a half-open rectangle, with `contains`.
  - The functions `dot`, `cross` and `overlap`.
- `rigid2d.body`
  - `Shape`: a circle or a polygon. It is made with `Shape.circle` or `Shape.polygon`.
  - `Body`: a rigid body.
    - `init_mass` computes the area, the centroid, the inertia and the inverse mass.
    - `step` advances the body under gravity and damping. It can follow preset position, angle or spin callables.
    - `drag_point`, `drag_whole` and `drag_force` move the body with the mouse.
    - `wrap` moves the body to the opposite side of a rectangle it has left.
    - `render` draws the body.
  - `electrostatic` exchanges Coulomb impulses between two charged bodies.
- `rigid2d.collision`
  - `collide_bodies` returns the `Contact`s between two bodies.
  - `Contact.resolve` applies the normal and friction impulses and pushes the bodies apart.
  - The lower-level helpers are `collide_shapes`, `collide_circles`, `closest_contact_vertex`, `support_circle` and `support_polygon`.
- `rigid2d.connection`
  - `Connection` has one of the kinds in `ConnectionType`:
    - `ROPE` and `LINK` are rigid constraints. A rope acts only when stretched.
    - `SPRING` and `CORD` apply Hooke impulses. A cord acts only when stretched.
  - `other_body` returns the body at the other end.
- `rigid2d.builders`
  - Shape descriptions: `ball`, `box`, `regular_polygon`, `parallelogram`, `trapezoid`, `cross` and `framed_box`.
  - Scene helpers that add objects to a world: `create_body`, `create_connection`, `boundary`, `gear`, `strand` and `necklace`.
- `rigid2d.creator`
  - `Creator` builds bodies and connections from mouse gestures.
  - The gesture depends on the `CreateMode`: box, ball, plate, particle, connection, point or nail.
- `rigid2d.world`
  - `World` holds bodies and connections and handles input in the `Mode`s drag, select, create and delete.
  - It sorts bodies into a spatial grid (`rebuild_grid`) and detects collisions (`detect_collisions`).
  - It runs sub-stepped physics (`simulate`).
  - `render` draws the scene. Bodies are coloured according to the `DisplayMode`.
- `rigid2d.raster`: `Canvas` (colours, alpha and depth) and `Color`, with these functions:
  - `fill_rect_raw`, `fill_rect`, `fill_rotated_rect` and `fill_ellipse`;
  - `outlined_rect_raw` and `outlined_rect`. The depth-tested variant draws its border in the fill colour;
  - `blit_base`, `blit` and `hit_tile`.
- `rigid2d.lines`: `clip_segment` and the depth-tested Bresenham `draw_line`.
- `rigid2d.triangles`: `fill_triangle`, a scan-line triangle fill clipped to a viewport.
- `rigid2d.inputs`
  - `InputState`: mouse and keyboard state, fed through `on_*` event methods and cleared with `end_frame`.
  - `FrameClock`: frame timing.
  - `Owners`: hover, wheel and keyboard ownership.
- `rigid2d.controls`: `Control`, `Delegate`, `RowList` and `ColumnList` for laying out UI elements.
- `rigid2d.localization`: `parse_localization` and `Localizer` for translation tables of the form `key $中文$ $English$`.
- `rigid2d.clip`: `Clip`, mono audio samples that can be loaded, saved and mixed into a buffer with `play`.

## Example

```python
from rigid2d.body import Body, Shape
from rigid2d.geometry import Vec2
from rigid2d.raster import Canvas
from rigid2d.world import World

world = World()
world.apply_config({"gravity": [0, 500]})

ball = Body(shapes=[Shape.circle(20)])
ball.o = Vec2(400, 100)
ball.init_mass()
world.bodies.append(ball)

for _ in range(60):
    world.simulate(1 / 60)
print(ball.o)

canvas = Canvas(1800, 860)
world.render(canvas)
```

For interactive use, do the following each frame:

1. Feed the window events into `world.input`.
2. Call `world.input.sync_mouse(...)`.
3. Call `world.update(dt)`.
4. Call `world.render(canvas)`.
5. Call `world.input.end_frame()`.

## What it does not do

The package has no window, no event loop and no audio device output. The
caller supplies the events and shows the canvas. It does not render text or
fonts. It has no scripting language for scenes: configuration is passed as
plain Python mappings and callables. It has no file format for saving or
loading whole scenes.