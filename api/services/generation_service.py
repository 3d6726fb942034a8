"""
Generation orchestrator: routes an utterance to the active mode's agent,
grounds it in the session's curriculum, calls the provider and applies the
validated result. One generation is in flight for the whole application.
"""

import json
import uuid
from typing import Callable, Dict, Optional

from pydantic import BaseModel, ValidationError

from agents.core.cancellation import SUPERSEDED, USER, CancellationToken, GenerationCancelled
from agents.core.llm import LLM, GenerationRequest
from agents.core.profile import AgentProfile
from agents.core.registry import AgentRegistry
from api.schemas.curriculum_schemas import Assessment, Curriculum
from api.schemas.generation_schemas import GenerationOutcome, GenerationStatus
from api.schemas.session_schemas import Message
from api.services.conversation_state import ConversationState
from api.services.notification_service import NotificationCenter
from api.services.session_service import SessionStore
from api.utils.logger import clear_generation_id, configure_logging, log_request, set_generation_id

logger = configure_logging()

CANCELLED_NOTICE = "Generation cancelled by user."
NO_OUTPUT_NOTICE = "The agent returned no output."
GENERIC_ERROR_REPLY = "Sorry, I encountered an error."

# (placeholder message, fragment just appended to it)
FragmentListener = Callable[[Message, str], None]


class GenerationValidationError(Exception):
    """Provider output could not be parsed or did not match the mode's model."""

    def __init__(self, mode: str, detail: str):
        super().__init__(detail)
        self.mode = mode
        self.detail = detail


def _strip_code_fence(text: str) -> str:
    body = text.strip()
    if body.startswith("```") and body.endswith("```") and len(body) >= 6:
        body = body[3:-3]
        first_newline = body.find("\n")
        if first_newline != -1 and body[:first_newline].strip().isalpha():
            body = body[first_newline + 1:]
    return body.strip()


def parse_structured(profile: AgentProfile, text: str) -> BaseModel:
    """Parse and validate provider text locally; the schema sent to the provider is only a hint."""
    try:
        payload = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise GenerationValidationError(
            profile.mode,
            f"Failed to parse {profile.name} response as JSON: {e.msg} (line {e.lineno}, column {e.colno})",
        ) from e
    try:
        return profile.response_model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'response'}: {err['msg']}" for err in e.errors()[:5]
        )
        raise GenerationValidationError(
            profile.mode,
            f"{profile.name} response does not match the {profile.response_model.__name__} schema: {problems}",
        ) from e


class GenerationOrchestrator:
    def __init__(
        self,
        llm: LLM,
        registry: AgentRegistry,
        sessions: SessionStore,
        conversation: ConversationState,
        notifications: NotificationCenter,
        model: Optional[str] = None,
    ):
        self.llm = llm
        self.registry = registry
        self.sessions = sessions
        self.conversation = conversation
        self.notifications = notifications
        self.model = model
        self._token: Optional[CancellationToken] = None
        self._appliers: Dict[str, Callable[[str, BaseModel], str]] = {
            "curriculum": self._apply_curriculum,
            "assessment": self._apply_assessment,
            "adaptive": self._apply_adaptive,
        }

    def cancel(self) -> bool:
        """User-initiated cancel of the in-flight generation."""
        token = self._token
        if token is None:
            return False
        token.cancel(USER)
        self._token = None
        self.conversation.is_generating = False
        self.notifications.add(CANCELLED_NOTICE, "info")
        logger.info("generation cancelled by user")
        return True

    async def submit(
        self,
        utterance: str,
        on_fragment: Optional[FragmentListener] = None,
    ) -> Optional[GenerationOutcome]:
        """
        Run one generation for the active session and mode. Blank utterances are
        ignored (returns None). ``on_fragment`` is called with the placeholder
        message and each streamed fragment right after it is applied.
        """
        if not utterance or not utterance.strip():
            return None

        if self._token is not None:
            self._token.cancel(SUPERSEDED)
        token = CancellationToken()
        self._token = token

        session = self.sessions.active
        session_id, mode = session.id, session.mode
        profile = self.registry.get(mode)
        set_generation_id()
        logger.info("generation submitted session=%s mode=%s agent=%s", session_id, mode, profile.name)

        self.conversation.add_message(mode, "user", utterance, session_id=session_id)
        self.conversation.is_generating = True

        def outcome(status: GenerationStatus, message: Optional[str] = None) -> GenerationOutcome:
            return GenerationOutcome(status=status, mode=mode, session_id=session_id, message=message)

        try:
            if profile.requires_curriculum and session.curriculum is None:
                reply = self.conversation.add_message(
                    mode, "model", profile.missing_curriculum_reply, session_id=session_id
                )
                logger.info("precondition failed session=%s mode=%s: no curriculum", session_id, mode)
                return outcome(GenerationStatus.PRECONDITION_FAILED, reply.text)

            request = GenerationRequest(
                prompt=profile.build_prompt(utterance, session.curriculum),
                system_instruction=profile.system_instruction,
                temperature=profile.temperature,
                response_schema=profile.response_schema,
                model=self.model,
            )
            with log_request(logger, f"generate mode={mode} session={session_id}"):
                if profile.streaming:
                    return await self._run_stream(profile, request, token, session_id, outcome, on_fragment)
                return await self._run_single(profile, request, token, session_id, outcome)
        except GenerationCancelled as e:
            logger.info("generation stopped session=%s mode=%s reason=%s", session_id, mode, e.reason)
            return outcome(_cancel_status(e.reason))
        except Exception as e:
            if token.cancelled:
                logger.info("suppressed failure after cancellation session=%s: %s", session_id, e)
                return outcome(_cancel_status(token.reason))
            return self._fail(profile, session_id, e, outcome)
        finally:
            if self._token is token:
                self._token = None
                self.conversation.is_generating = False
            clear_generation_id()

    async def _run_single(self, profile, request, token, session_id, outcome) -> GenerationOutcome:
        response = await self.llm.generate(request, cancel_token=token)
        token.raise_if_cancelled()

        if response.text is None or not response.text.strip():
            self.notifications.add(NO_OUTPUT_NOTICE, "info")
            logger.warning("no output session=%s mode=%s", session_id, profile.mode)
            return outcome(GenerationStatus.NO_OUTPUT)

        document = parse_structured(profile, response.text)
        if self.sessions.get(session_id) is None:
            logger.warning("session %s deleted during generation; result discarded", session_id)
            return outcome(GenerationStatus.DISCARDED)

        reply = self._appliers[profile.mode](session_id, document)
        return outcome(GenerationStatus.COMPLETED, reply)

    async def _run_stream(self, profile, request, token, session_id, outcome, on_fragment=None) -> GenerationOutcome:
        placeholder = self.conversation.open_stream(profile.mode, session_id)
        stream = self.llm.stream(request, cancel_token=token)
        try:
            while True:
                token.raise_if_cancelled()
                try:
                    chunk = await anext(stream)
                except StopAsyncIteration:
                    break
                token.raise_if_cancelled()
                if self.sessions.get(session_id) is None:
                    logger.warning("session %s deleted during streaming; remaining output discarded", session_id)
                    return outcome(GenerationStatus.DISCARDED)
                if chunk.text:
                    self.conversation.append_fragment(profile.mode, placeholder.id, chunk.text, session_id)
                    if on_fragment is not None:
                        on_fragment(placeholder, chunk.text)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
        return outcome(GenerationStatus.COMPLETED, placeholder.text)

    def _fail(self, profile: AgentProfile, session_id: str, error: Exception, outcome) -> GenerationOutcome:
        detail = str(error) or type(error).__name__
        if isinstance(error, GenerationValidationError):
            logger.warning("validation rejected session=%s mode=%s: %s", session_id, profile.mode, detail)
        else:
            logger.exception("provider failure session=%s mode=%s", session_id, profile.mode)

        reply_text = profile.error_reply or f"Error: {detail}"
        if self.sessions.get(session_id) is not None:
            self.conversation.add_message(profile.mode, "model", reply_text, session_id=session_id)
        self.notifications.add(f"Error: {detail}", "error")
        return outcome(GenerationStatus.FAILED, reply_text)

    # ----- result application (synchronous, all-or-nothing) -----

    def _apply_curriculum(self, session_id: str, curriculum: Curriculum) -> str:
        first = self.sessions.replace_curriculum(session_id, curriculum)
        text = (
            f'I\'ve designed a curriculum for "{curriculum.title}".'
            if first
            else "I've updated the curriculum blueprint."
        )
        self.conversation.add_message("curriculum", "model", text, session_id=session_id)
        self.notifications.add("Curriculum updated successfully", "success")
        return text

    def _apply_assessment(self, session_id: str, assessment: Assessment) -> str:
        assessment = assessment.model_copy(update={"id": uuid.uuid4().hex})
        self.sessions.prepend_assessment(session_id, assessment)
        text = f'I\'ve created a {assessment.type} for "{assessment.target_context}".'
        self.conversation.add_message("assessment", "model", text, session_id=session_id)
        self.notifications.add("Assessment generated", "success")
        return text

    def _apply_adaptive(self, session_id: str, curriculum: Curriculum) -> str:
        self.sessions.replace_curriculum(session_id, curriculum)
        text = "Curriculum adapted successfully."
        self.conversation.add_message("adaptive", "model", text, session_id=session_id)
        self.notifications.add("Curriculum adapted", "success")
        return text


def _cancel_status(reason: Optional[str]) -> GenerationStatus:
    return GenerationStatus.SUPERSEDED if reason == SUPERSEDED else GenerationStatus.CANCELLED
