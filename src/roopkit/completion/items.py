"""
Completion items for each authoring context.
"""

from dataclasses import dataclass
from enum import Enum

from roopkit.completion.context import ContextTag, resolve_completion_context
from roopkit.core.catalog import DEFAULT_CATALOG, KeywordCatalog
from roopkit.core.settings import DEFAULT_SETTINGS, AnalysisSettings


class CompletionItemKind(Enum):
    SNIPPET = "snippet"
    KEYWORD = "keyword"
    FUNCTION = "function"
    OPERATOR = "operator"


@dataclass(frozen=True)
class CompletionItem:
    """
    One suggestion.

    Params:
        label: Text shown in the suggestion list
        kind: Presentation kind
        detail: Short category description
        insert_text: Snippet body; None inserts the label
        sort_text: Sort key; contextual snippets sort before the catalog
        documentation: Markdown documentation, if the keyword has any
    """

    label: str
    kind: CompletionItemKind
    detail: str | None = None
    insert_text: str | None = None
    sort_text: str = "z"
    documentation: str | None = None


def _item(
    catalog: KeywordCatalog,
    label: str,
    kind: CompletionItemKind,
    detail: str | None = None,
    insert_text: str | None = None,
    sort_text: str = "z",
) -> CompletionItem:
    return CompletionItem(
        label=label,
        kind=kind,
        detail=detail,
        insert_text=insert_text,
        sort_text=sort_text,
        documentation=catalog.doc_for(label),
    )


def contextual_items(
    tag: ContextTag, catalog: KeywordCatalog = DEFAULT_CATALOG
) -> list[CompletionItem]:
    """Snippets specific to a context; ANYWHERE has none."""
    snippet = CompletionItemKind.SNIPPET
    keyword = CompletionItemKind.KEYWORD

    if tag is ContextTag.LINE_START:
        return [
            _item(catalog, "start task", snippet, "Begin a task",
                  'start task "${1:TaskName}"\n\t$0\nend task', "a"),
            _item(catalog, "when", keyword, "Event-triggered block",
                  "when ${1:predicate}:\n\t$0", "b"),
            _item(catalog, "if", keyword, "Conditional block",
                  "if ${1:condition}:\n\t$0", "c"),
            _item(catalog, "parallel", keyword, "Parallel block",
                  "parallel:\n\t$0", "d"),
            _item(catalog, "repeat", keyword, "Repeat block",
                  "repeat ${1:3} times:\n\t$0", "e"),
        ]

    if tag is ContextTag.EVENT_BRANCH:
        return [
            _item(catalog, f"on {event}:", keyword, "Event branch",
                  f"on {event}:\n\t$0", "a")
            for event in catalog.events
        ]

    if tag is ContextTag.LOOP_COUNT:
        return [
            _item(catalog, "repeat N times:", snippet, "Fixed-count loop",
                  "repeat ${1:3} times:\n\t$0", "a")
        ]

    if tag is ContextTag.MODULE_DECLARATION:
        return [
            _item(catalog, "use module", keyword, "Declare a capability module",
                  'use module "${1:ModuleName}"', "a")
        ]

    if tag is ContextTag.TIME_TRIGGER:
        return [
            _item(catalog, 'at time "HH:MM":', snippet, "Time trigger",
                  'at time "${1:08:00}":\n\t$0', "a")
        ]

    if tag is ContextTag.CONDITION:
        return [
            _item(catalog, 'if object "type" with color "c" is on "Area":', snippet,
                  "Perceptual condition",
                  'if object "${1:mug}" with color "${2:red}" is on "${3:Table}":\n\t$0',
                  "a")
        ]

    return []


def catalog_items(
    catalog: KeywordCatalog = DEFAULT_CATALOG, extra_keywords: tuple[str, ...] = ()
) -> list[CompletionItem]:
    """The full, unfiltered catalog: actions by domain, directives, structure, operators, extras."""
    items = []

    for domain, verbs in catalog.actions:
        for verb in verbs:
            items.append(
                _item(catalog, verb, CompletionItemKind.FUNCTION, f"{domain} action",
                      catalog.insert_texts.get(verb, verb))
            )

    items.extend(
        _item(catalog, directive, CompletionItemKind.KEYWORD, "Directive")
        for directive in catalog.directives
    )
    items.extend(
        _item(catalog, word, CompletionItemKind.KEYWORD, "Structural")
        for word in catalog.structural
    )
    items.extend(
        _item(catalog, operator, CompletionItemKind.OPERATOR, "Operator")
        for operator in catalog.operators
    )

    extras = list(catalog.extra_keywords)
    extras.extend(word for word in extra_keywords if word not in extras)
    items.extend(
        _item(catalog, word, CompletionItemKind.KEYWORD, "Custom keyword")
        for word in extras
    )
    return items


def completion_items(
    line_prefix: str,
    catalog: KeywordCatalog = DEFAULT_CATALOG,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> list[CompletionItem]:
    """
    Suggestions for a cursor position.

    Params:
        line_prefix: Line text up to the cursor
        catalog: Vocabulary to suggest from
        settings: Supplies the user's extra keywords

    Returns:
        Contextual snippets for the resolved context followed by the full catalog
    """
    tag = resolve_completion_context(line_prefix)
    return contextual_items(tag, catalog) + catalog_items(
        catalog, settings.completion.extra_keywords
    )
