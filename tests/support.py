"""Shared fixtures: a tiny manifest, text table and Pillow-made sprites."""

import json
import os
import shutil

from PIL import Image

from pokeball.config import DATA_DIR, Settings

SPECIES = ["bulbasaur", "pikachu", "arcanine", "mr-mime"]
CHARSET = "@#*+=-:."


def write_json(path: str, payload):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f)


def cell_at(image, x: int, y: int):
    idx = x + y * image.width
    return image.chars[idx], image.colors[idx]


def sprite_image(size=(16, 12), fill=(220, 40, 40), backdrop=(0, 0, 0)) -> Image.Image:
    """A flat backdrop with a solid block in the middle."""
    width, height = size
    img = Image.new("RGB", size, backdrop)
    for y in range(height // 4, height - height // 4):
        for x in range(width // 4, width - width // 4):
            img.putpixel((x, y), fill)
    return img


def save_animation(path: str, fills, size=(12, 12)):
    frames = [sprite_image(size, fill) for fill in fills]
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=100, loop=0)


def make_app_fixture(root: str, width: int = 60, height: int = 20) -> Settings:
    data_dir = os.path.join(root, "data")
    sprite_dir = os.path.join(root, "assets", "pokemon")
    os.makedirs(data_dir)
    os.makedirs(sprite_dir)
    shutil.copy(os.path.join(DATA_DIR, "text.json"), os.path.join(data_dir, "text.json"))
    sprite_image((32, 24)).save(os.path.join(sprite_dir, "pikachu.png"))
    save_animation(os.path.join(sprite_dir, "arcanine.gif"), [(220, 40, 40), (40, 220, 40)])
    write_json(
        os.path.join(data_dir, "pokedex.json"),
        {
            "species": SPECIES,
            "sprites": {
                "pikachu": {"path": "assets/pokemon/pikachu.png", "width": 16, "height": 8},
                "arcanine": {"path": "assets/pokemon/arcanine.gif", "width": 12, "height": 6, "animated": True},
            },
        },
    )
    return Settings(
        width=width,
        height=height,
        color_mode="ansi256",
        db_path=os.path.join(root, "pokedex.db"),
        assets_dir=root,
        data_dir=data_dir,
    )
