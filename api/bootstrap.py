from dataclasses import dataclass
from typing import Optional

from agents.core.llm import LLM
from agents.core.profile import AgentProfile
from agents.core.registry import AgentRegistry

from api.config import AppConfig, build_engine, build_session_factory, create_db, get_config
from api.prompt_builders import (
    ADAPTIVE_SYSTEM_PROMPT,
    ASSESSMENT_SYSTEM_PROMPT,
    COACH_SYSTEM_PROMPT,
    CURRICULUM_SYSTEM_PROMPT,
    build_adaptive_prompt,
    build_assessment_prompt,
    build_coach_prompt,
    build_curriculum_prompt,
)
from api.schemas.curriculum_schemas import Assessment, Curriculum
from api.schemas.response_schemas import ASSESSMENT_SCHEMA, CURRICULUM_SCHEMA
from api.services.auth_service import AuthService
from api.services.conversation_state import ConversationState
from api.services.generation_service import GENERIC_ERROR_REPLY, GenerationOrchestrator
from api.services.notification_service import NotificationCenter
from api.services.persistence import PersistenceAdapter
from api.services.session_service import SessionStore
from api.services.settings_service import SettingsStore
from api.utils.logger import configure_logging
from infra.storage.store import KeyValueStore

logger = configure_logging()


def build_registry() -> AgentRegistry:
    registry = AgentRegistry()

    registry.register(
        AgentProfile(
            mode="curriculum",
            name="Curriculum Architect",
            system_instruction=CURRICULUM_SYSTEM_PROMPT,
            temperature=0.2,
            build_prompt=build_curriculum_prompt,
            response_schema=CURRICULUM_SCHEMA,
            response_model=Curriculum,
        )
    )
    registry.register(
        AgentProfile(
            mode="assessment",
            name="Assessment Designer",
            system_instruction=ASSESSMENT_SYSTEM_PROMPT,
            temperature=0.4,
            build_prompt=build_assessment_prompt,
            response_schema=ASSESSMENT_SCHEMA,
            response_model=Assessment,
            requires_curriculum=True,
            missing_curriculum_reply=(
                "I need a curriculum to work with before I can create assessments. "
                "Please generate one in Phase 1."
            ),
        )
    )
    # Same schema as the architect; the adaptive agent rewrites the whole document.
    registry.register(
        AgentProfile(
            mode="adaptive",
            name="Adaptive Learning Specialist",
            system_instruction=ADAPTIVE_SYSTEM_PROMPT,
            temperature=0.3,
            build_prompt=build_adaptive_prompt,
            response_schema=CURRICULUM_SCHEMA,
            response_model=Curriculum,
            requires_curriculum=True,
            missing_curriculum_reply=(
                "I cannot adapt a curriculum that doesn't exist yet. Please create one in Phase 1."
            ),
        )
    )
    registry.register(
        AgentProfile(
            mode="coach",
            name="Coach Assistant",
            system_instruction=COACH_SYSTEM_PROMPT,
            temperature=0.5,
            build_prompt=build_coach_prompt,
            streaming=True,
            error_reply=GENERIC_ERROR_REPLY,
        )
    )

    return registry


@dataclass
class Studio:
    """
    Application state: every store and service, wired once and passed by
    reference to whatever needs it.
    """

    persistence: PersistenceAdapter
    notifications: NotificationCenter
    settings: SettingsStore
    sessions: SessionStore
    conversation: ConversationState
    auth: AuthService
    orchestrator: GenerationOrchestrator
    registry: AgentRegistry

    def hydrate(self) -> "Studio":
        self.auth.load()
        self.settings.load()
        self.sessions.hydrate()
        return self

    def reset(self) -> None:
        """Drop sessions, settings and the signed-in user, then start fresh."""
        self.orchestrator.cancel()
        self.sessions.reset()
        self.settings.reset()
        self.auth.reset()
        self.notifications.clear()
        logger.info("studio reset")


def build_studio(
    llm: LLM,
    store: KeyValueStore,
    *,
    model: Optional[str] = None,
    notification_ttl: Optional[float] = None,
    hydrate: bool = True,
) -> Studio:
    persistence = PersistenceAdapter(store)
    notifications = (
        NotificationCenter(ttl=notification_ttl) if notification_ttl is not None else NotificationCenter()
    )
    sessions = SessionStore(persistence, notifications)
    conversation = ConversationState(sessions, notifications)
    registry = build_registry()
    studio = Studio(
        persistence=persistence,
        notifications=notifications,
        settings=SettingsStore(persistence),
        sessions=sessions,
        conversation=conversation,
        auth=AuthService(persistence, notifications),
        orchestrator=GenerationOrchestrator(llm, registry, sessions, conversation, notifications, model=model),
        registry=registry,
    )
    return studio.hydrate() if hydrate else studio


def build_default_studio(config: Optional[AppConfig] = None) -> Studio:
    """Production wiring: Ollama provider and the SQL-backed key-value store."""
    from infra.llm.ollama import OllamaLLM
    from infra.storage.sql_store import SqlKeyValueStore

    config = config or get_config()
    engine = build_engine(config.database_url)
    create_db(engine)
    llm = OllamaLLM(
        model=config.ollama_model,
        base_url=config.ollama_base_url,
        timeout=config.generation_timeout,
    )
    return build_studio(
        llm,
        SqlKeyValueStore(build_session_factory(engine)),
        model=config.ollama_model,
        notification_ttl=config.notification_ttl_seconds,
    )
