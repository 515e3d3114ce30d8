# Services package init
"""
ScatterBrain Backend - Storage & Processor Layer
================================================

What:  Everything between the HTTP routes and the database.

Service Inventory:
    - ThoughtStorage:      thought table, compound thought+label insert
    - LabelStorage:        label table
    - ThoughtLabelStorage: thought_with_labels link table
    - ThoughtProcessor:    facade composing the three over one engine

Routes reach these only through the ThoughtProcessor injected into the app;
nothing here knows about HTTP.
"""

from scatterbrain.services.label_storage import LabelStorage
from scatterbrain.services.processor import ThoughtProcessor
from scatterbrain.services.thought_label_storage import ThoughtLabelStorage
from scatterbrain.services.thought_storage import ThoughtStorage

__all__ = ["LabelStorage", "ThoughtLabelStorage", "ThoughtProcessor", "ThoughtStorage"]
