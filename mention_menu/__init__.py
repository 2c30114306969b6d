"""@mention suggestions for the document editor."""

from .aggregator import ResultAggregator
from .avatar import AvatarSize
from .client import MentionApiClient
from .config import MentionMenuConfig
from .controller import MentionMenuController
from .controller import QueryPhase
from .errors import MalformedResponseError
from .errors import MentionMenuError
from .errors import TransportError
from .fetcher import SuggestionFetcher
from .identity import MentionIdentityBuilder
from .identity import deterministic_mention_id
from .identity import random_mention_id
from .models import AccessGrant
from .models import DocumentEntity
from .models import IconKind
from .models import IconRef
from .models import MentionCandidate
from .models import MentionKind
from .models import Notification
from .models import Query
from .models import RawSuggestionResult
from .models import SuggestionListState
from .models import UserEntity
from .routing import parse_document_slug
from .selection import Notifier
from .selection import SelectionResolver

__all__ = [
    "MentionMenuController",
    "QueryPhase",
    "SuggestionFetcher",
    "MentionIdentityBuilder",
    "ResultAggregator",
    "SelectionResolver",
    "Notifier",
    "MentionApiClient",
    "MentionMenuConfig",
    "MentionMenuError",
    "TransportError",
    "MalformedResponseError",
    "random_mention_id",
    "deterministic_mention_id",
    "parse_document_slug",
    "AvatarSize",
    "AccessGrant",
    "DocumentEntity",
    "IconKind",
    "IconRef",
    "MentionCandidate",
    "MentionKind",
    "Notification",
    "Query",
    "RawSuggestionResult",
    "SuggestionListState",
    "UserEntity",
]
