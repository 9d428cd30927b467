"""
Keyword catalog for the ROOP DSL.

The catalog backs completion, hover and the unrecognized-verb check. It is an
immutable value injected into each component, so documents analysed with
different configurations never share mutable keyword state.
"""

from attrs import evolve, field, frozen


def _as_tuple(values) -> tuple[str, ...]:
    return tuple(values)


def _as_groups(groups) -> tuple[tuple[str, tuple[str, ...]], ...]:
    if isinstance(groups, dict):
        groups = groups.items()
    return tuple((name, tuple(verbs)) for name, verbs in groups)


DIRECTIVES = ("import", "include", "pragma")

STRUCTURAL = (
    "start task",
    "end task",
    "template task",
    "context",
    "use module",
    "define",
    "run",
    "call",
    "await run",
    "detached run",
    "assign",
    "dispatch task",
    "synchronize",
)

CONTROL = (
    # Triggers and blocks
    "when",
    "on",
    "if",
    "elseif",
    "else",
    "repeat",
    "while",
    "for",
    "parallel",
    "at time",
    # Flow control
    "break",
    "continue",
    "exit",
    "abort",
    "retry",
    "fallback",
)

EVENTS = ("failure", "success", "timeout", "deviation", "interruption")

OPERATORS = (
    "and",
    "or",
    "not",
    "is",
    "exists",
    "near",
    "on",
    "in",
    "before",
    "after",
    "within",
    "confidently",
    "probably",
    "similar to",
    "anchor on",
    "relative to",
)

ACTIONS = {
    "Perception": (
        "detect", "scan", "observe", "track", "classify", "identify",
        "localize", "map", "estimate",
    ),
    "Navigation": (
        "move", "navigate", "go to", "approach", "follow", "back off",
        "retreat", "avoid", "dock", "undock", "align", "orient", "set speed",
    ),
    "Manipulation": (
        "grasp", "release", "pick", "place", "push", "pull", "press", "turn",
        "flip", "slide", "insert", "remove", "pour", "fill", "empty", "stir",
        "scoop", "shake", "tighten", "loosen", "open", "close", "lock",
        "unlock",
    ),
    "Environment": (
        "turn on", "turn off", "dim", "brighten", "toggle", "set temperature",
        "ventilate", "humidify",
    ),
    "Household": (
        "clean", "wipe", "wash", "rinse", "dry", "vacuum", "mop", "sweep",
        "sanitize", "disinfect", "sort", "stack", "fold",
    ),
    "Kitchen": (
        "cook", "bake", "boil", "fry", "heat", "cool", "brew", "serve",
        "deliver",
    ),
    "Logistics": ("fetch", "bring", "collect", "carry", "transfer", "handover"),
    "Communication": (
        "say", "display", "notify", "ask", "expect", "wait for", "log", "play",
        "pause", "stop", "resume", "record", "capture", "photograph", "stream",
    ),
    "Measurement": (
        "measure", "weigh", "sample", "analyze", "test", "calibrate",
        "self-check",
    ),
    "Maintenance": ("charge", "start module", "stop module", "restart module"),
    "Multi-robot": (
        "assign", "dispatch", "synchronize", "coordinate", "share map",
    ),
    "Data & Memory": ("remember", "recall", "store", "load"),
    "Safety": ("emergency stop", "yield", "wait"),
    "Planning": ("plan", "plan path", "plan grasp"),
}

# Phrases tried before falling back to a single leading word, longest first
MULTI_WORD_PHRASES = (
    "emergency stop",
    "dispatch task",
    "template task",
    "detached run",
    "with timeout",
    "start task",
    "use module",
    "plan grasp",
    "await run",
    "set speed",
    "plan path",
    "sync when",
    "end task",
    "turn off",
    "wait for",
    "back off",
    "turn on",
    "at time",
    "go to",
)

SINGLE_WORD_STARTERS = (
    "let", "set", "with", "every", "sync", "testcase", "simulate",
    "say", "move", "grasp", "release", "display", "notify", "ask", "expect",
    "log", "detect", "scan", "observe", "track", "classify", "identify",
    "localize", "map", "navigate", "approach", "follow", "retreat", "avoid",
    "dock", "undock", "align", "orient", "push", "pull", "press", "turn",
    "flip", "slide", "insert", "remove", "pour", "fill", "empty", "stir",
    "scoop", "shake", "tighten", "loosen", "open", "close", "lock", "unlock",
    "clean", "wipe", "wash", "rinse", "dry", "vacuum", "mop", "sweep",
    "sanitize", "disinfect", "sort", "stack", "fold", "cook", "bake", "boil",
    "fry", "heat", "cool", "brew", "serve", "deliver", "fetch", "bring",
    "collect", "carry", "transfer", "handover", "play", "pause", "stop",
    "resume", "record", "capture", "photograph", "stream", "measure", "weigh",
    "sample", "analyze", "test", "calibrate", "charge", "assign", "dispatch",
    "synchronize", "coordinate", "remember", "recall", "store", "load",
    "yield", "wait", "plan", "run", "call", "define", "context", "template",
    "start", "end", "use", "import", "include", "pragma", "abort", "retry",
    "fallback", "break", "continue", "exit", "parallel", "if", "elseif",
    "else", "when", "on", "at", "while", "repeat", "for",
)

KEYWORD_DOCS = {
    "start task": "Begins a named task. Balanced with `end task`.",
    "end task": "Ends the current task.",
    "template task": "Declares a named task template block.",
    "use module": "Declares a capability module by name so its actions can be invoked.",
    "run": "Invokes a named task or inline block.",
    "await run": "Runs a task and waits for it to complete before continuing.",
    "detached run": "Runs a task asynchronously and continues immediately.",
    "assign": "Assigns a role to an agent (multi-robot orchestration).",
    "dispatch task": "Sends a named task to a remote agent.",
    "synchronize": "Declares a rendezvous or barrier.",
    "when": "Event-driven trigger block based on perception or context.",
    "on": "Outcome/event branch such as `on failure:`.",
    "if": "Conditional block.",
    "elseif": "Conditional else-if block.",
    "else": "Else branch.",
    "repeat": "Fixed-count loop block. Example: `repeat 3 times:`",
    "while": "Conditioned loop block.",
    "for": "Iteration over a collection.",
    "parallel": "Runs child blocks concurrently.",
    "at time": "Schedules a block to run at a specific time.",
    "abort": "Terminates the current task.",
    "retry": "Repeats the preceding action/block after failure.",
    "fallback": "Declares an alternate strategy when the main one fails.",
    "let": "Declare and bind a variable to a value or semantic reference.",
    "move": "Moves a robot or actuator to a target (object, location, or offset).",
    "navigate": "Navigate a mobile base to a named area or coordinates.",
    "grasp": "Closes the end-effector around a target to hold it.",
    "release": "Opens the end-effector to let go of the target.",
    "turn on": "Switches a device or module on.",
    "turn off": "Switches a device or module off.",
    "say": "Speaks the given text.",
    "display": "Shows text on a visual panel or screen.",
    "notify": "Sends a user/system notification.",
    "ask": "Prompts the user and captures an answer.",
    "expect": "Waits for a value or condition within a deadline.",
    "wait for": "Pauses until an event or state is observed.",
    "detect": "Invokes perception to find an entity matching the description.",
    "track": "Maintains a live reference to a moving target.",
    "plan": "Requests a plan (e.g., path or sequence) for a goal.",
    "plan path": "Plans a path from the current state to a target.",
    "plan grasp": "Plans a feasible grasp for a target.",
    "testcase": "Begin a test case for a target task; supports simulate/expect clauses.",
    "simulate": "Inject a percept, state, or context for testing.",
}

# Snippet bodies for verbs whose bare label is not a useful insertion
ACTION_INSERT_TEXTS = {
    "say": 'say "${1:text}"',
    "display": 'display "${1:text}" on "${2:Panel}"',
    "notify": 'notify user "${1:message}"',
    "ask": 'ask "${1:question}" as ${2:variable}',
    "expect": 'expect ${1:object "name"} within ${2:10} seconds',
    "wait for": "wait for ${1:event}",
    "move": 'move ${1:Arm1} to ${2:"Target"}',
    "grasp": "grasp with ${1:Gripper1}",
    "release": "release with ${1:Gripper1}",
    "detect": 'let ${1:var} = object "${2:type}" with ${3:attribute} "${4:value}"',
    "track": "track position of ${1:target} as ${2:var}",
    "plan path": "plan path from ${1:Arm1} to ${2:Target}",
    "plan grasp": "plan grasp for ${1:Target}",
}


@frozen
class KeywordCatalog:
    """Immutable vocabulary of the DSL.

    Params:
        directives: Preprocessor-style directives (`import`, `include`, ...)
        structural: Structural keywords and phrases
        control: Control-flow and trigger keywords
        events: Outcome names accepted after `on`
        operators: Condition operators offered as text suggestions
        actions: Action verbs grouped by domain, in display order
        multi_word_phrases: Leading phrases matched before single words
        single_word_starters: Single words accepted at the start of a statement
        docs: Markdown documentation for keywords and phrases
        insert_texts: Snippet insert texts for selected action verbs
        extra_keywords: User allow-list, accepted and suggested like built-ins
    """

    directives: tuple[str, ...] = field(default=DIRECTIVES, converter=_as_tuple)
    structural: tuple[str, ...] = field(default=STRUCTURAL, converter=_as_tuple)
    control: tuple[str, ...] = field(default=CONTROL, converter=_as_tuple)
    events: tuple[str, ...] = field(default=EVENTS, converter=_as_tuple)
    operators: tuple[str, ...] = field(default=OPERATORS, converter=_as_tuple)
    actions: tuple[tuple[str, tuple[str, ...]], ...] = field(
        default=ACTIONS, converter=_as_groups
    )
    multi_word_phrases: tuple[str, ...] = field(
        default=MULTI_WORD_PHRASES, converter=_as_tuple
    )
    single_word_starters: tuple[str, ...] = field(
        default=SINGLE_WORD_STARTERS, converter=_as_tuple
    )
    docs: dict[str, str] = field(factory=lambda: dict(KEYWORD_DOCS))
    insert_texts: dict[str, str] = field(factory=lambda: dict(ACTION_INSERT_TEXTS))
    extra_keywords: tuple[str, ...] = field(default=(), converter=_as_tuple)

    @property
    def known_starters(self) -> frozenset[str]:
        """Every leading token the unrecognized-verb check accepts."""
        return frozenset(
            word.lower()
            for word in (
                *self.single_word_starters,
                *self.multi_word_phrases,
                *self.directives,
                *self.structural,
                *self.control,
                *self.operators,
                *(verb for _, verbs in self.actions for verb in verbs),
                *self.extra_keywords,
            )
        )

    def is_known(self, token: str) -> bool:
        return token.lower() in self.known_starters

    def doc_for(self, key: str) -> str | None:
        return self.docs.get(key.lower())

    def with_extra_keywords(self, keywords) -> "KeywordCatalog":
        """Return a copy whose allow-list also holds `keywords` (order kept, no duplicates)."""
        merged = list(self.extra_keywords)
        for keyword in keywords:
            if keyword and keyword not in merged:
                merged.append(keyword)
        return evolve(self, extra_keywords=tuple(merged))


DEFAULT_CATALOG = KeywordCatalog()
