"""
Domain errors raised by the POS services and repositories.

The API layer translates them into HTTP responses; everything below it
raises them unchanged.
"""


class CampusCoffeeError(Exception):
    """Base class for all domain errors."""


class OsmNodeNotFoundError(CampusCoffeeError):
    """The OSM node is missing, unreachable, or its document is unusable."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"OpenStreetMap node with ID {node_id} not found.")


class OsmNodeMissingFieldsError(CampusCoffeeError):
    """The OSM node lacks one of the tags required to build a POS."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(
            f"OpenStreetMap node with ID {node_id} is missing required fields."
        )


class DuplicatePosNameError(CampusCoffeeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"POS with name '{name}' already exists.")


class PosNotFoundError(CampusCoffeeError):
    def __init__(self, pos_id: int):
        self.pos_id = pos_id
        super().__init__(f"POS with ID {pos_id} does not exist.")
