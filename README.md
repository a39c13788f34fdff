# cubgame

A small first-person raycasting maze explorer. It reads a `.cub` scene file
that gives the wall textures, two colours and a grid map. You walk around the
map in a pygame window. Doors slide open as you come near them, and a masked
minimap in the top-left corner shows the area around you.

## Installing

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running

```
cubgame path/to/scene.cub
```

The command takes exactly one argument. On a bad argument count or an invalid
scene it prints `Error` and a reason to standard error and exits with status 1.
If a texture cannot be loaded, or the window cannot be opened, it prints the
error and exits with that error's `ErrorCode` value.

The window is 960x600. The view is drawn at 320x200 and scaled up to fit.

| Key / input | Action                  |
|-------------|-------------------------|
| `W` / `S`   | move forward / backward |
| `A` / `D`   | strafe left / right     |
| `Q` / `E`   | turn left / right       |
| mouse       | turn (the first few movements are ignored) |
| `Esc`       | quit                    |

### Files the game needs

Textures are loaded as PNG files with Pillow. Besides the four wall textures
named in the scene, these paths are read relative to the current directory:

- `assets/Brick_Texture.png`: the door texture.
- `assets/minimap_player.png`: the player icon drawn at the minimap centre.
- `assets/minimap_mask.png`: the minimap mask. It must be at least 96x96.
  Every pixel that is not pure white is copied over the minimap.

## Scene files

### Header

The header holds six entries, in any order. Blank lines may appear between them.

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` name the wall textures.
- `F` and `C` give `R,G,B` colours. Each component is from 0 to 255, and
  spaces or tabs may surround the components.
- The `C` colour paints the floor. The `F` colour paints the ceiling.

Any other line, and any map line that comes before all six entries, makes the
scene invalid.

### Map

The map follows the header. Each map line starts with `1`, after any leading
spaces.

```
111111
100D01
10S001
111111
```

| Character   | Meaning                                               |
|-------------|-------------------------------------------------------|
| `1`         | wall                                                  |
| `0`         | floor                                                 |
| `D`         | door lying along the x axis                           |
| `d`         | door lying along the y axis                           |
| `S`         | player start, facing south                            |
| space, tab  | wall                                                  |

Other rules for the map:

- There must be exactly one start.
- Lines shorter than the widest one are padded with walls.
- The area the player can reach from the start must not touch the edge of the
  map. A scene that breaks this rule is rejected.

## Using it as a library

`cubgame.scene.load_scene` reads and validates a scene file.
`cubgame.scene.parse_scene` does the same for a list of lines, each keeping
its newline. Both return a `Scene`, which holds:

- the map cells, width and height;
- the player's start position and angle;
- the texture paths;
- `floor_color` and `ceiling_color` as `0xRRGGBBAA` integers.

Invalid scenes raise `cubgame.errors.ParseError`, which is a `ValueError`.
Engine failures raise `cubgame.errors.CubError`, whose `code` is an
`ErrorCode`. Examples of engine failures are a missing asset, a PNG that will
not load, or a minimap mask that is too small.

```python
from cubgame.scene import load_scene
from cubgame.game import Game, load_assets

scene = load_scene("maps/level.cub")
game = Game(scene, load_assets(scene))
frame = game.update({"w"}, mouse_x=None)   # one frame; returns a Texture
```

`Game.update` updates the doors, applies the held keys and the mouse position,
casts the rays, and returns the rendered 320x200 camera texture. The held keys
are given as a set of the names `"q"`, `"e"`, `"w"`, `"s"`, `"a"`, `"d"` and
`"escape"`. Pressing escape sets `game.running` to `False`.

Other modules:

| Module              | Contents                                                        |
|---------------------|-----------------------------------------------------------------|
| `cubgame.world`     | `GameMap` and `element_at`                                      |
| `cubgame.movement`  | `Player`, `is_pos_walkable`                                     |
| `cubgame.doors`     | `Door`, `DoorList`, `is_door_nearby`                            |
| `cubgame.raycast`   | `Ray`, `prepare_ray`, `cast_ray`, `cast_rays`                   |
| `cubgame.render`    | `draw_stripe`, `draw_walls`, `update_minimap`, `apply_minimap_mask` |
| `cubgame.texture`   | `Texture` (an RGBA pixel buffer), `draw_line`                   |
| `cubgame.assets`    | `AssetStore`, named textures                                    |
| `cubgame.header`    | `scan_header`, `parse_color`, `rgb_to_hex`, `check_textures`    |
| `cubgame.mapcheck`  | `Grid`, `build_grid`, `check_walls`, `format_grid`              |
| `cubgame.mathutil`  | `normalize_angle`, `map_angle`, `remap`, `remapf`               |

## What it does not do

- Textures are read only as PNG. `cubgame.header.check_textures` checks for
  readable `.xpm` paths, but the loader does not use it, and XPM images are
  not loaded.
- Map lines accept only the `S` start. `N`, `E` and `W` starts are rejected.
- There is no sound, no enemies and no saving.