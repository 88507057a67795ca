"""layer: manage the layer stack of a layered sprite."""

from pxl.cli.common import parse_bool, print_json
from pxl.core.blend import BLEND_MODES
from pxl.core.layer import FLATTENED_LAYER_NAME
from pxl.errors import ValidationError
from pxl.storage.meta import read_layered_sprite, write_layered_sprite


def cmd_add(args):
    sprite = read_layered_sprite(args.path)
    if args.name in sprite.layer_names():
        raise ValidationError(f'Layer "{args.name}" already exists in {args.path}')
    sprite.add_layer(args.name, args.opacity, parse_bool(args.visible), args.blend)
    write_layered_sprite(args.path, sprite)
    print(f'Added layer "{args.name}" to {args.path}')
    print(f"  Opacity: {args.opacity}")
    print(f"  Visible: {args.visible.lower()}")
    print(f"  Blend: {args.blend}")
    print(f"  Total layers: {len(sprite.layers)}")


def cmd_list(args):
    sprite = read_layered_sprite(args.path)
    print_json([
        {
            "index": i,
            "name": layer.name,
            "opacity": layer.opacity,
            "visible": layer.visible,
            "blend": layer.blend.value,
        }
        for i, layer in enumerate(sprite.layers)
    ])


def cmd_remove(args):
    sprite = read_layered_sprite(args.path)
    sprite.remove_layer(args.name)
    write_layered_sprite(args.path, sprite)
    print(f'Removed layer "{args.name}" from {args.path}')
    print(f"Remaining layers: {len(sprite.layers)}")


def cmd_move(args):
    sprite = read_layered_sprite(args.path)
    current = sprite.index_of(args.name)
    if current == args.to:
        print(f'Layer "{args.name}" is already at index {args.to}')
        return
    sprite.move_layer(args.name, args.to)
    write_layered_sprite(args.path, sprite)
    print(f'Moved layer "{args.name}" from index {current} to {args.to}')


def cmd_opacity(args):
    sprite = read_layered_sprite(args.path)
    sprite.set_opacity(args.name, args.opacity)
    write_layered_sprite(args.path, sprite)
    print(f'Set opacity of layer "{args.name}" to {args.opacity}')


def cmd_visible(args):
    sprite = read_layered_sprite(args.path)
    visible = parse_bool(args.visible)
    sprite.set_visible(args.name, visible)
    write_layered_sprite(args.path, sprite)
    print(f'Set visibility of layer "{args.name}" to {str(visible).lower()}')


def cmd_merge(args):
    sprite = read_layered_sprite(args.path)
    merged = sprite.merge_layers(args.keep, args.other)
    write_layered_sprite(args.path, sprite)
    print(f'Merged layers "{args.keep}" and "{args.other}" into "{merged.name}"')
    print(f"Total layers: {len(sprite.layers)}")


def cmd_flatten(args):
    sprite = read_layered_sprite(args.path)
    sprite.flatten()
    write_layered_sprite(args.path, sprite)
    print("Flattened all layers into a single layer")
    print(f'Final result: 1 layer named "{FLATTENED_LAYER_NAME}"')


def register(sub):
    group = sub.add_parser("layer", help="Manage layers of a layered sprite")
    group.set_defaults(group_parser=group)
    cmds = group.add_subparsers(dest="layer_command")
    base = "Sprite base path (without extension)"

    p = cmds.add_parser("add", help="Add a transparent layer on top")
    p.add_argument("path", help=base)
    p.add_argument("--name", required=True, help="Layer name")
    p.add_argument("--opacity", type=int, default=255, help="Layer opacity (0-255)")
    p.add_argument("--visible", default="true", help="Layer visibility (true|false)")
    p.add_argument("--blend", default="normal", help=f"Blend mode ({'|'.join(BLEND_MODES)})")
    p.set_defaults(func=cmd_add)

    p = cmds.add_parser("list", help="Print the layers as JSON, bottom first")
    p.add_argument("path", help=base)
    p.set_defaults(func=cmd_list)

    p = cmds.add_parser("remove", help="Remove a layer")
    p.add_argument("path", help=base)
    p.add_argument("name")
    p.set_defaults(func=cmd_remove)

    p = cmds.add_parser("move", help="Move a layer to a new stack index")
    p.add_argument("path", help=base)
    p.add_argument("name")
    p.add_argument("--to", type=int, required=True, help="Target index (0 = bottom)")
    p.set_defaults(func=cmd_move)

    p = cmds.add_parser("opacity", help="Set layer opacity")
    p.add_argument("path", help=base)
    p.add_argument("name")
    p.add_argument("opacity", type=int, help="0-255")
    p.set_defaults(func=cmd_opacity)

    p = cmds.add_parser("visible", help="Show or hide a layer")
    p.add_argument("path", help=base)
    p.add_argument("name")
    p.add_argument("visible", help="true|false")
    p.set_defaults(func=cmd_visible)

    p = cmds.add_parser("merge", help="Merge OTHER into KEEP")
    p.add_argument("path", help=base)
    p.add_argument("keep", help="Layer that is kept")
    p.add_argument("other", help="Layer that is removed after the merge")
    p.set_defaults(func=cmd_merge)

    p = cmds.add_parser("flatten", help="Collapse every layer into one")
    p.add_argument("path", help=base)
    p.set_defaults(func=cmd_flatten)
