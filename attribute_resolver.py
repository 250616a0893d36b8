# attribute_resolver.py
import logging
from typing import Mapping, Optional, Tuple

from config import DEFAULT_CONFIG
from models import AttributeUse, AvailabilitySpec, Footnote, ObjCSelector
from utils import itemize

logger = logging.getLogger(__name__)


class AttributeResolver:
    """
    Maps an attribute on a declaration to a clause for the summary sentence
    ("available on macOS 13.0"), a footnote explaining it, or nothing.
    """

    def __init__(self, explanations: Optional[Mapping[str, str]] = None):
        self.explanations = explanations if explanations is not None else DEFAULT_CONFIG.attribute_explanations

    def resolve(self, attr: AttributeUse) -> Tuple[Optional[str], Optional[Footnote]]:
        arg = attr.argument

        if isinstance(arg, AvailabilitySpec):
            if not arg.platforms:
                return None, None
            platforms = [f"{platform} {version}".strip() for platform, version in arg.platforms]
            return f"available on {itemize(platforms)}", None

        if isinstance(arg, ObjCSelector):
            return "exposed to Objective-C", None

        # argument-less attributes, plus a few spelled with a fixed argument like @inline(__always)
        text = attr.text
        explanation = self.explanations.get(text)
        if explanation is None:
            logger.debug("Ignoring attribute %s", text)
            return None, None
        return None, Footnote(anchor_text=text, text=explanation)
