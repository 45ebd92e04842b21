"""
Tabletop Simulator save-file records.

Partial models of TTS's SaveState / ObjectState schema, covering what a deck
of custom cards needs. The knowledge base that documents the format is out
of date, so some fields TTS writes itself are missing here.

Field defaults are the fixed boilerplate every object carries; callers only
override what actually varies (name, transform, ids, descriptors).

Records are frozen and sequences are stored as tuples, so a built document
cannot change. The `custom_deck` maps are the one exception: pydantic keeps
them as plain dicts, and nothing mutates them after construction.

Casing on the wire:
- Records use PascalCase, with TTS's own acronyms (GUID, GMNotes, XmlUI, ...)
- TransformState uses camelCase (posX, rotY, ...)
- Vector3 and ColourState use lower-case single letters
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal

from tabledeck.models.card import CardShape

# TTS's default tint for custom objects
DEFAULT_TINT = 0.713235259


class Vector3(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class ColourState(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: float = DEFAULT_TINT
    g: float = DEFAULT_TINT
    b: float = DEFAULT_TINT


class TransformState(BaseModel):
    """Position, rotation and scale of an object."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    pos_x: float = 0.0
    pos_y: float = 0.0
    pos_z: float = 0.0
    rot_x: float = 0.0
    rot_y: float = 0.0
    rot_z: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    scale_z: float = 1.0


class CustomDeckState(BaseModel):
    """
    Visual descriptor of one custom card: its images and shape.

    `name` is kept for logging and equality checks only; TTS does not
    read it, so it is never serialized.
    """

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, frozen=True)

    name: str = Field(default="", exclude=True)
    face_url: str = Field(alias="FaceURL")
    back_url: str = Field(alias="BackURL")
    num_width: int | None = 1
    num_height: int | None = 1
    back_is_hidden: bool = True
    unique_back: bool = False
    card_type: CardShape = Field(default=CardShape.ROUNDED_RECTANGLE, alias="Type")


class ObjectState(BaseModel):
    """
    One object on the table: a whole deck, or one card inside it.

    Optional fields (card_id, deck_ids, contained_objects) are omitted from
    the document when unset rather than written as null.
    """

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, frozen=True)

    guid: str = Field(alias="GUID")
    name: str
    transform: TransformState = Field(default_factory=TransformState)
    nickname: str = ""
    description: str = ""
    gm_notes: str = Field(default="", alias="GMNotes")
    alt_look_angle: Vector3 = Field(default_factory=Vector3)
    color_diffuse: ColourState = Field(default_factory=ColourState)
    layout_group_sort_index: int = 0
    value: int = 0
    locked: bool = False
    grid: bool = True
    snap: bool = True
    ignore_fow: bool = Field(default=False, alias="IgnoreFoW")
    measure_movement: bool = False
    drag_selectable: bool = True
    autoraise: bool = True
    sticky: bool = True
    tooltip: bool = True
    grid_projection: bool = False
    hide_when_face_down: bool = True
    hands: bool = False
    card_id: int | None = Field(default=None, alias="CardID")
    sideways_card: bool = False
    deck_ids: tuple[int, ...] | None = Field(default=None, alias="DeckIDs")
    custom_deck: dict[int, CustomDeckState] = Field(default_factory=dict)
    lua_script: str = ""
    lua_script_state: str = ""
    xml_ui: str = Field(default="", alias="XmlUI")
    contained_objects: tuple["ObjectState", ...] | None = None


class SaveState(BaseModel):
    """Top-level TTS document. Saved objects are SaveStates too."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, frozen=True)

    save_name: str = ""
    date: str = ""
    version_number: str = ""
    game_mode: str = ""
    game_type: str = ""
    game_complexity: str = ""
    tags: tuple[str, ...] = ()
    gravity: float = 0.5
    play_area: float = 0.5
    table: str = ""
    sky: str = ""
    note: str = ""
    tab_states: dict[str, str] = Field(default_factory=dict)
    lua_script: str = ""
    lua_script_state: str = ""
    xml_ui: str = Field(default="", alias="XmlUI")
    object_states: tuple[ObjectState, ...] = ()
