"""
Root mutation type.

Every mutation that touches owned state first checks the request identity
and fails with ``UNAUTHENTICATED`` before reading any input or the store.
"""

import logging
from typing import Optional, Type, TypeVar

import strawberry
from pydantic import BaseModel, ValidationError
from strawberry.types import Info

from auth.jwt_service import create_access_token
from schemas import ReactionInput, SignupInput, ThoughtInput
from services import thoughts as thought_service
from services import users as user_service
from services.users import DuplicateUserError
from utils.audit import audit

from .errors import INCORRECT_CREDENTIALS, AuthenticationError, InputValidationError, OperationError
from .types import AuthPayload, ThoughtType, UserType, parse_id

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)


def _validate(schema: Type[InputT], **data) -> InputT:
    """Run a pydantic input schema, surfacing its first message as BAD_USER_INPUT."""
    try:
        return schema(**data)
    except ValidationError as exc:
        msg = exc.errors()[0].get("msg", "Invalid input")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        raise InputValidationError(msg)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def login(self, info: Info, email: str, password: str) -> AuthPayload:
        async with info.context.session() as db:
            user = await user_service.authenticate(db, email, password)
            if user is None:
                audit.log_login(email, None, "failure")
                raise AuthenticationError(INCORRECT_CREDENTIALS)

            audit.log_login(user.username, user.id, "success")
            return AuthPayload(token=create_access_token(user), user=UserType.from_model(user))

    @strawberry.mutation
    async def add_user(self, info: Info, username: str, email: str, password: str) -> AuthPayload:
        data = _validate(SignupInput, username=username, email=email, password=password)
        async with info.context.session() as db:
            try:
                user = await user_service.create_user(db, data)
            except DuplicateUserError:
                raise OperationError("Username or email is already in use")

            audit.log_signup(user.username, user.id)
            return AuthPayload(token=create_access_token(user), user=UserType.from_model(user))

    @strawberry.mutation
    async def add_thought(self, info: Info, thought_text: str) -> ThoughtType:
        identity = info.context.require_user()
        data = _validate(ThoughtInput, thought_text=thought_text)
        async with info.context.session() as db:
            thought = await thought_service.create_thought(db, identity.id, identity.username, data)
            audit.log_thought_change("CREATE", identity.username, thought.id)
            return ThoughtType.from_model(thought)

    @strawberry.mutation
    async def add_reaction(
        self, info: Info, thought_id: strawberry.ID, reaction_body: str
    ) -> Optional[ThoughtType]:
        identity = info.context.require_user()
        data = _validate(ReactionInput, reaction_body=reaction_body)
        pk = parse_id(thought_id)
        if pk is None:
            return None
        async with info.context.session() as db:
            thought = await thought_service.add_reaction(db, pk, identity.username, data)
            if thought is None:
                return None
            audit.log_reaction_change("CREATE", identity.username, pk)
            return ThoughtType.from_model(thought)

    @strawberry.mutation
    async def add_friend(self, info: Info, friend_id: strawberry.ID) -> Optional[UserType]:
        identity = info.context.require_user()
        pk = parse_id(friend_id)
        async with info.context.session() as db:
            if pk is None:
                user = await user_service.get_user_by_id(db, identity.id)
            else:
                user = await user_service.add_friend(db, identity.id, pk)
                audit.log_friend_change("ADD_FRIEND", identity.username, pk)
            return UserType.from_model(user) if user else None

    @strawberry.mutation
    async def remove_friend(self, info: Info, friend_id: strawberry.ID) -> Optional[UserType]:
        identity = info.context.require_user()
        pk = parse_id(friend_id)
        async with info.context.session() as db:
            if pk is None:
                user = await user_service.get_user_by_id(db, identity.id)
            else:
                user = await user_service.remove_friend(db, identity.id, pk)
                audit.log_friend_change("REMOVE_FRIEND", identity.username, pk)
            return UserType.from_model(user) if user else None

    @strawberry.mutation(description="Delete one of the caller's thoughts; null if not found or not theirs.")
    async def remove_thought(self, info: Info, thought_id: strawberry.ID) -> Optional[ThoughtType]:
        identity = info.context.require_user()
        pk = parse_id(thought_id)
        if pk is None:
            return None
        async with info.context.session() as db:
            thought = await thought_service.remove_thought(db, identity.username, pk)
            if thought is None:
                return None
            audit.log_thought_change("DELETE", identity.username, pk)
            return ThoughtType.from_model(thought)

    @strawberry.mutation
    async def remove_reaction(
        self, info: Info, thought_id: strawberry.ID, reaction_id: strawberry.ID
    ) -> Optional[ThoughtType]:
        identity = info.context.require_user()
        thought_pk = parse_id(thought_id)
        if thought_pk is None:
            return None
        reaction_pk = parse_id(reaction_id)
        async with info.context.session() as db:
            if reaction_pk is None:
                thought = await thought_service.get_thought(db, thought_pk)
            else:
                thought = await thought_service.remove_reaction(
                    db, thought_pk, reaction_pk, identity.username
                )
                if thought is not None:
                    audit.log_reaction_change("DELETE", identity.username, thought_pk, reaction_pk)
            return ThoughtType.from_model(thought) if thought else None
