"""
Structured audit logging for the Deep Thoughts backend.

Events go to a dedicated ``audit`` logger as one JSON object per line.
The request id and the acting user are carried in ``ContextVar``s so they
follow the request across awaits without being threaded through every call.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


_request_id_context: ContextVar[Optional[str]] = ContextVar(
    'request_id', default=None
)

_actor_context: ContextVar[Optional[str]] = ContextVar(
    'actor', default=None
)


class AuditLogger:
    """Writes account, thought, reaction and friend-list changes to the audit log."""

    def __init__(self):
        self.logger = logging.getLogger('audit')

    def set_request_id(self, request_id: str) -> None:
        _request_id_context.set(request_id)

    def get_request_id(self) -> Optional[str]:
        return _request_id_context.get()

    def set_actor(self, actor: str) -> None:
        """Set the authenticated user for this request context."""
        _actor_context.set(actor)

    def get_actor(self) -> Optional[str]:
        return _actor_context.get()

    def log(
        self,
        action: str,
        actor: str,
        resource: str,
        resource_id: str,
        status: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a structured audit event.

        Args:
            action: What happened (e.g. 'SIGNUP', 'LOGIN', 'CREATE', 'DELETE')
            actor: Username performing the action; 'user' falls back to the
                actor stored in the request context
            resource: Affected resource type ('User', 'Thought', 'Reaction', 'Friend')
            resource_id: Identifier of the affected resource
            status: 'success' or 'failure'
            details: Optional extra context
        """
        event = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'action': action,
            'actor': actor if actor != 'user' else (self.get_actor() or 'user'),
            'resource': resource,
            'resource_id': resource_id,
            'status': status,
            'request_id': self.get_request_id(),
            'details': details or {},
        }
        self.logger.info(json.dumps(event))

    def log_login(self, username: str, user_id: Optional[int], status: str) -> None:
        self.log(
            action='LOGIN',
            actor=username,
            resource='User',
            resource_id=str(user_id) if user_id is not None else 'unknown',
            status=status,
        )

    def log_signup(self, username: str, user_id: int) -> None:
        self.log(
            action='SIGNUP',
            actor=username,
            resource='User',
            resource_id=str(user_id),
            status='success',
        )

    def log_thought_change(self, operation: str, username: str, thought_id: int) -> None:
        """
        Log thought creation or removal.

        Args:
            operation: 'CREATE' or 'DELETE'
            username: Acting user
            thought_id: Affected thought
        """
        self.log(
            action=operation,
            actor=username,
            resource='Thought',
            resource_id=str(thought_id),
            status='success',
        )

    def log_reaction_change(
        self,
        operation: str,
        username: str,
        thought_id: int,
        reaction_id: Optional[int] = None,
    ) -> None:
        details = {'thought_id': thought_id}
        self.log(
            action=operation,
            actor=username,
            resource='Reaction',
            resource_id=str(reaction_id) if reaction_id is not None else 'new',
            status='success',
            details=details,
        )

    def log_friend_change(self, operation: str, username: str, friend_id: int) -> None:
        self.log(
            action=operation,
            actor=username,
            resource='Friend',
            resource_id=str(friend_id),
            status='success',
        )


# Global audit logger instance for convenient import
audit = AuditLogger()
