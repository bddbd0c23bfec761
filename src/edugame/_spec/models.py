# Area: Spec
"""
edugame._spec.models — GameSpec data contract
=============================================

Immutable pydantic models for the declarative GameSpec document.

Attributes are snake_case; every model validates and dumps the
camelCase wire shape produced by the content generator, e.g.::

    GameSpec.model_validate(document)
    spec.model_dump(by_alias=True)

Section content is a tagged union keyed by ``type``.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


SECTION_TYPES = (
    "quiz",
    "flashcards",
    "matching",
    "sorting",
    "narrative",
    "simulation",
    "exploration",
    "challenge",
    "info",
)

Difficulty = Literal["beginner", "intermediate", "advanced"]
Complexity = Literal["basic", "standard", "complex"]
ProgressionType = Literal["linear", "branching", "adaptive", "open", "milestone"]
QuestionType = Literal["single-choice", "multiple-choice", "text-input", "true-false"]
TestMode = Literal["flip-reveal", "type-answer", "speak-answer"]
ComparisonOperator = Literal["==", "!=", ">", "<", ">=", "<="]


class SpecModel(BaseModel):
    """Base for every GameSpec model: frozen, camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ══════════════════════════════════════════════════════════════
# METADATA / THEME / CONFIG
# ══════════════════════════════════════════════════════════════

class GameMetadata(SpecModel):
    title: str = "Game"
    description: str = ""
    subject: str = ""
    topic: str = ""
    difficulty: Difficulty = "beginner"
    complexity: Complexity = "basic"
    estimated_minutes: int = 10
    learning_objectives: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    language: str = "English"


class ThemeBackground(SpecModel):
    type: str = "solid"
    value: str = ""


class GameTheme(SpecModel):
    primary_color: str
    secondary_color: str
    background: ThemeBackground
    icon: str
    mood: str


class GameConfig(SpecModel):
    game_type: str
    secondary_types: List[str] = Field(default_factory=list)
    time_limit: int = 0
    question_time_limit: int = 0
    allow_skip: bool = True
    allow_back: bool = True
    hints_enabled: bool = True
    max_hints: int = 3
    lives: int = 0
    shuffle_content: bool = False
    feedback_type: str = "immediate"
    show_correct_answer: bool = True


# ══════════════════════════════════════════════════════════════
# SECTION CONTENT
# ══════════════════════════════════════════════════════════════

class MediaContent(SpecModel):
    type: str
    content: str
    caption: Optional[str] = None


class QuizOption(SpecModel):
    id: str
    text: str
    image: Optional[str] = None


class QuizQuestion(SpecModel):
    id: str
    question: str
    media: Optional[MediaContent] = None
    question_type: QuestionType = "single-choice"
    options: List[QuizOption] = Field(default_factory=list)
    correct_answer: Union[int, List[int], str]
    explanation: Optional[str] = None
    hint: Optional[str] = None
    points: int = 10
    time_limit: Optional[int] = None


class QuizSectionContent(SpecModel):
    type: Literal["quiz"] = "quiz"
    questions: List[QuizQuestion]


class CardFace(SpecModel):
    text: str
    media: Optional[MediaContent] = None


class Flashcard(SpecModel):
    id: str
    front: CardFace
    back: CardFace
    hint: Optional[str] = None
    category: Optional[str] = None


class FlashcardSectionContent(SpecModel):
    type: Literal["flashcards"] = "flashcards"
    cards: List[Flashcard]
    test_mode: TestMode = "flip-reveal"


class PairSide(SpecModel):
    text: str
    image: Optional[str] = None


class MatchPair(SpecModel):
    id: str
    left: PairSide
    right: PairSide


class MatchingSectionContent(SpecModel):
    type: Literal["matching"] = "matching"
    pairs: List[MatchPair]
    match_style: str = "tap-tap"
    time_limit: Optional[int] = None


class SortItem(SpecModel):
    id: str
    text: str
    image: Optional[str] = None
    correct_category: str


class SortCategory(SpecModel):
    id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None


class SortingSectionContent(SpecModel):
    type: Literal["sorting"] = "sorting"
    items: List[SortItem]
    categories: List[SortCategory]
    instructions: str = ""


class ChoiceCondition(SpecModel):
    type: Literal["variable", "score", "item"] = "variable"
    variable: str = ""
    operator: ComparisonOperator = "=="
    value: Any = None


class ChoiceEffect(SpecModel):
    type: Literal["set-variable", "add-score", "add-item", "remove-item"]
    target: str = ""
    value: Any = None


class SceneAction(SpecModel):
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class NarrativeChoice(SpecModel):
    id: str
    text: str
    target_scene: str
    condition: Optional[ChoiceCondition] = None
    effects: List[ChoiceEffect] = Field(default_factory=list)


class NarrativeScene(SpecModel):
    id: str
    text: str = ""
    speaker: Optional[str] = None
    background: Optional[str] = None
    choices: List[NarrativeChoice] = Field(default_factory=list)
    next_scene: Optional[str] = None
    actions: List[SceneAction] = Field(default_factory=list)
    is_ending: bool = False
    ending_type: Optional[Literal["success", "failure", "neutral"]] = None


class NarrativeSectionContent(SpecModel):
    type: Literal["narrative"] = "narrative"
    scenes: List[NarrativeScene]
    start_scene: str


class SimulationState(SpecModel):
    turn: int = 0
    resources: Dict[str, float] = Field(default_factory=dict)
    variables: Dict[str, Any] = Field(default_factory=dict)
    unlocked_actions: List[str] = Field(default_factory=list)
    completed_objectives: List[str] = Field(default_factory=list)


class SimResource(SpecModel):
    id: str
    name: str = ""
    icon: str = ""
    initial_value: float = 0
    min_value: float = 0
    max_value: float = 100
    description: str = ""


class SimAction(SpecModel):
    id: str
    name: str = ""
    description: str = ""
    icon: str = ""
    cost: Dict[str, float] = Field(default_factory=dict)
    effects: Dict[str, float] = Field(default_factory=dict)
    unlock_condition: Optional[str] = None
    cooldown: int = 0


class SimEventChoice(SpecModel):
    text: str
    effects: Dict[str, float] = Field(default_factory=dict)


class SimEvent(SpecModel):
    id: str
    name: str = ""
    description: str = ""
    probability: float = 0.0
    conditions: Optional[str] = None
    effects: Dict[str, float] = Field(default_factory=dict)
    choices: List[SimEventChoice] = Field(default_factory=list)


class SimObjective(SpecModel):
    id: str
    description: str = ""
    type: Literal["reach-value", "maintain-value", "complete-action", "survive-turns"]
    target: str = ""
    value: float = 0
    required: bool = False
    points: int = 0


class SimulationSectionContent(SpecModel):
    type: Literal["simulation"] = "simulation"
    initial_state: SimulationState
    resources: List[SimResource]
    actions: List[SimAction] = Field(default_factory=list)
    events: List[SimEvent] = Field(default_factory=list)
    objectives: List[SimObjective] = Field(default_factory=list)
    max_turns: int = 10


class WorldSize(SpecModel):
    width: int = 0
    height: int = 0


class ExplorationWorld(SpecModel):
    name: str = ""
    description: str = ""
    size: WorldSize = Field(default_factory=WorldSize)
    theme: str = ""


class LocationEvent(SpecModel):
    type: Literal["info", "quiz", "item", "narrative"]
    content: Any = None


class ExplorationLocation(SpecModel):
    id: str
    name: str = ""
    description: str = ""
    position: Dict[str, float] = Field(default_factory=dict)
    on_visit: Optional[LocationEvent] = None
    visible: bool = True
    icon: str = ""


class Collectible(SpecModel):
    id: str
    name: str = ""
    description: str = ""
    icon: str = ""
    location_id: str
    points: int = 0
    knowledge: str = ""


class ExplorationSectionContent(SpecModel):
    type: Literal["exploration"] = "exploration"
    world: ExplorationWorld = Field(default_factory=ExplorationWorld)
    locations: List[ExplorationLocation]
    collectibles: List[Collectible] = Field(default_factory=list)
    start_location: str


class ChallengeItem(SpecModel):
    id: str
    prompt: str
    correct_answer: Union[int, float, str]
    options: Optional[List[Union[int, float, str]]] = None
    points: int = 10
    time_bonus: Optional[int] = None


class ChallengeSectionContent(SpecModel):
    type: Literal["challenge"] = "challenge"
    challenge_type: str = "speed-round"
    items: List[ChallengeItem]
    time_limit: int = 60
    target_score: int = 0
    max_mistakes: int = 0


class InfoBlock(SpecModel):
    type: Literal["text", "image", "list", "table", "quote", "code"]
    content: Any = None


class InfoSectionContent(SpecModel):
    type: Literal["info"] = "info"
    title: str = ""
    content: List[InfoBlock] = Field(default_factory=list)


SectionContent = Annotated[
    Union[
        QuizSectionContent,
        FlashcardSectionContent,
        MatchingSectionContent,
        SortingSectionContent,
        NarrativeSectionContent,
        SimulationSectionContent,
        ExplorationSectionContent,
        ChallengeSectionContent,
        InfoSectionContent,
    ],
    Field(discriminator="type"),
]


class UnlockCondition(SpecModel):
    type: Literal["score", "complete-section", "variable"]
    target: str = ""
    value: Any = None


class GameSection(SpecModel):
    id: str
    title: str
    description: Optional[str] = None
    type: Literal[
        "quiz", "flashcards", "matching", "sorting", "narrative",
        "simulation", "exploration", "challenge", "info",
    ]
    content: SectionContent
    unlock_condition: Optional[UnlockCondition] = None


# ══════════════════════════════════════════════════════════════
# CONTENT / PROGRESSION / SCORING
# ══════════════════════════════════════════════════════════════

class CharacterInfo(SpecModel):
    name: str
    role: str = ""
    description: str = ""
    avatar: Optional[str] = None


class IntroScreen(SpecModel):
    title: str = ""
    description: str = ""
    instructions: List[str] = Field(default_factory=list)
    narrative: Optional[str] = None
    character: Optional[CharacterInfo] = None


class OutroScreen(SpecModel):
    completion_message: str = ""
    learning_summary: str = ""
    next_steps: List[str] = Field(default_factory=list)


class GameContent(SpecModel):
    intro: Optional[IntroScreen] = None
    sections: List[GameSection]
    outro: Optional[OutroScreen] = None


class ProgressionConfig(SpecModel):
    type: ProgressionType = "linear"
    section_order: Optional[List[str]] = None
    start_section: Optional[str] = None
    minimum_score_to_progress: Optional[int] = None
    show_progress: bool = True


class ScoreRating(SpecModel):
    min_percentage: float
    label: str
    message: str = ""
    stars: int = 0


class ScoringConfig(SpecModel):
    max_score: int = 100
    points_per_correct: int = 10
    penalty_per_wrong: int = 0
    time_bonus: bool = False
    streak_multiplier: float = 1
    ratings: List[ScoreRating] = Field(default_factory=list)


class GameSpec(SpecModel):
    """The full declarative description of one playable game."""

    version: str = "1.0"
    metadata: GameMetadata
    theme: GameTheme
    config: GameConfig
    content: GameContent
    progression: ProgressionConfig
    scoring: ScoringConfig

    def section(self, section_id: str) -> Optional[GameSection]:
        for section in self.content.sections:
            if section.id == section_id:
                return section
        return None

    def section_ids(self) -> List[str]:
        return [s.id for s in self.content.sections]

    def effective_order(self) -> List[str]:
        """Progression order; declared section order when none is given."""
        if self.progression.section_order:
            return list(self.progression.section_order)
        return self.section_ids()

    def first_section_id(self) -> str:
        if self.progression.section_order:
            return self.progression.section_order[0]
        if self.progression.start_section and self.section(self.progression.start_section):
            return self.progression.start_section
        sections = self.content.sections
        return sections[0].id if sections else ""

    def to_document(self) -> Dict[str, Any]:
        """Serialize back to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
