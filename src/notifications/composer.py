"""
Assignment Notice Composer

Builds the title, body and data payload of the "item assigned" push.

The text below is parsed by the mobile clients. Keep the templates
byte-for-byte stable; add a new locale or version instead of editing one.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from domain.models import AssignmentEvent, AssignmentKind, ItemCategory

ASSIGNMENT_DATA_TYPE = "item_assigned"

DEFAULT_CATEGORY_SYMBOL = "📋"

CATEGORY_SYMBOLS: Dict[str, str] = {
    ItemCategory.ACTIVE_TASK.value: "🎯",
    ItemCategory.BUG.value: "🐛",
    ItemCategory.LOGIC.value: "⚙️",
    ItemCategory.IDEA.value: "💡",
}


@dataclass(frozen=True)
class NoticeCatalog:
    """Localized literals for one language."""
    locale: str
    title_template: str
    body_template: str
    unknown_user: str
    unknown_workspace: str
    new_item_title: str
    reassigned_item_title: str


CATALOGS: Dict[str, NoticeCatalog] = {
    "tr": NoticeCatalog(
        locale="tr",
        title_template="{symbol} Sana iş atandı!",
        body_template='{assigner} sana "{title}" atadı',
        unknown_user="Bilinmeyen",
        unknown_workspace="Workspace",
        new_item_title="Yeni görev",
        reassigned_item_title="Görev",
    ),
    "en": NoticeCatalog(
        locale="en",
        title_template="{symbol} Task assigned to you!",
        body_template='{assigner} assigned you "{title}"',
        unknown_user="Unknown",
        unknown_workspace="Workspace",
        new_item_title="New task",
        reassigned_item_title="Task",
    ),
}

DEFAULT_LOCALE = "tr"


@dataclass(frozen=True)
class AssignmentNotice:
    """Visible part of the push."""
    title: str
    body: str


def get_catalog(locale: Optional[str] = None) -> NoticeCatalog:
    """Catalog for a locale; unknown locales use the default one."""
    return CATALOGS.get(locale or DEFAULT_LOCALE, CATALOGS[DEFAULT_LOCALE])


def category_symbol(item_type: Optional[str]) -> str:
    """Glyph shown in front of the title. Total: unknown types get the default."""
    return CATEGORY_SYMBOLS.get(item_type, DEFAULT_CATEGORY_SYMBOL)


def compose_assignment_notice(
    assigner_name: str,
    item_title: str,
    item_type: Optional[str] = ItemCategory.ACTIVE_TASK.value,
    locale: Optional[str] = None,
) -> AssignmentNotice:
    """
    Build the localized title/body pair.

    Args:
        assigner_name: Display name of the user who made the assignment
        item_title: Title of the assigned item
        item_type: Item category, selects the title glyph
        locale: Catalog to use (defaults to Turkish)

    Returns:
        AssignmentNotice
    """
    catalog = get_catalog(locale)
    return AssignmentNotice(
        title=catalog.title_template.format(symbol=category_symbol(item_type)),
        body=catalog.body_template.format(assigner=assigner_name, title=item_title),
    )


def default_item_title(kind: AssignmentKind, locale: Optional[str] = None) -> str:
    """Title used when the item has none; differs for new and reassigned items."""
    catalog = get_catalog(locale)
    if kind == AssignmentKind.CREATED:
        return catalog.new_item_title
    return catalog.reassigned_item_title


def build_assignment_data(event: AssignmentEvent, workspace_name: str) -> Dict[str, str]:
    """Data payload delivered with the push. FCM requires string values."""
    return {
        "type": ASSIGNMENT_DATA_TYPE,
        "workspaceId": str(event.workspace_id),
        "itemId": str(event.item_id),
        "workspaceName": str(workspace_name),
    }
