from .library import ContentLibrary, TemplateLibrary, pick_weighted
from .loader import default_content, default_library, load_content, load_library
from .models import Category, ContentTemplate, DecorNode, ModuleTemplate, Shape, SocketDef

__all__ = [
    "Category",
    "ContentLibrary",
    "ContentTemplate",
    "DecorNode",
    "ModuleTemplate",
    "Shape",
    "SocketDef",
    "TemplateLibrary",
    "default_content",
    "default_library",
    "load_content",
    "load_library",
    "pick_weighted",
]
