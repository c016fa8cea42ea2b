from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meilikit.domain.models.task import Task


class MeiliSearchError(Exception):
    """Base class for every error raised by the client."""


class TransportError(MeiliSearchError):
    """Raised when a request never reached the server or no response came back."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        super().__init__(f"{method} {url} failed before a response was received: {reason}")
        self.method = method
        self.url = url
        self.reason = reason


class ApiError(MeiliSearchError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str | None = None,
        type: str | None = None,
        link: str | None = None,
    ) -> None:
        super().__init__(f"{message} (status={status_code}, code={code})")
        self.status_code = status_code
        self.message = message
        self.code = code
        self.type = type
        self.link = link


class ClientValidationError(MeiliSearchError):
    """Raised when a request is malformed before it is sent."""


class TaskTimeoutError(MeiliSearchError):
    """Raised when a task did not reach a terminal status within the wait budget."""

    def __init__(
        self,
        task_uid: int,
        timeout_ms: int,
        elapsed_ms: float,
        task: Task | None = None,
    ) -> None:
        super().__init__(
            f"Timeout of {timeout_ms}ms exceeded after {elapsed_ms:.0f}ms "
            f"while waiting for task {task_uid} to be resolved."
        )
        self.task_uid = task_uid
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms
        self.task = task


class ErrorCode(StrEnum):
    INDEX_CREATION_FAILED = "index_creation_failed"
    MISSING_INDEX_UID = "missing_index_uid"
    INDEX_ALREADY_EXISTS = "index_already_exists"
    INDEX_NOT_FOUND = "index_not_found"
    INVALID_INDEX_UID = "invalid_index_uid"
    INDEX_NOT_ACCESSIBLE = "index_not_accessible"
    INVALID_INDEX_OFFSET = "invalid_index_offset"
    INVALID_INDEX_LIMIT = "invalid_index_limit"
    INVALID_STATE = "invalid_state"
    PRIMARY_KEY_INFERENCE_FAILED = "primary_key_inference_failed"
    INDEX_PRIMARY_KEY_ALREADY_EXISTS = "index_primary_key_already_exists"
    INVALID_INDEX_PRIMARY_KEY = "invalid_index_primary_key"
    DOCUMENTS_FIELDS_LIMIT_REACHED = "document_fields_limit_reached"
    MISSING_DOCUMENT_ID = "missing_document_id"
    INVALID_DOCUMENT_ID = "invalid_document_id"
    INVALID_CONTENT_TYPE = "invalid_content_type"
    MISSING_CONTENT_TYPE = "missing_content_type"
    INVALID_DOCUMENT_FIELDS = "invalid_document_fields"
    INVALID_DOCUMENT_LIMIT = "invalid_document_limit"
    INVALID_DOCUMENT_OFFSET = "invalid_document_offset"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    MISSING_PAYLOAD = "missing_payload"
    MALFORMED_PAYLOAD = "malformed_payload"
    NO_SPACE_LEFT_ON_DEVICE = "no_space_left_on_device"
    INVALID_STORE_FILE = "invalid_store_file"
    INVALID_REQUEST = "invalid_request"
    INVALID_DOCUMENT_GEO_FIELD = "invalid_document_geo_field"
    INVALID_SEARCH_Q = "invalid_search_q"
    INVALID_SEARCH_OFFSET = "invalid_search_offset"
    INVALID_SEARCH_LIMIT = "invalid_search_limit"
    INVALID_SEARCH_PAGE = "invalid_search_page"
    INVALID_SEARCH_HITS_PER_PAGE = "invalid_search_hits_per_page"
    INVALID_SEARCH_ATTRIBUTES_TO_RETRIEVE = "invalid_search_attributes_to_retrieve"
    INVALID_SEARCH_ATTRIBUTES_TO_CROP = "invalid_search_attributes_to_crop"
    INVALID_SEARCH_CROP_LENGTH = "invalid_search_crop_length"
    INVALID_SEARCH_ATTRIBUTES_TO_HIGHLIGHT = "invalid_search_attributes_to_highlight"
    INVALID_SEARCH_SHOW_MATCHES_POSITION = "invalid_search_show_matches_position"
    INVALID_SEARCH_FILTER = "invalid_search_filter"
    INVALID_SEARCH_SORT = "invalid_search_sort"
    INVALID_SEARCH_FACETS = "invalid_search_facets"
    INVALID_SEARCH_HIGHLIGHT_PRE_TAG = "invalid_search_highlight_pre_tag"
    INVALID_SEARCH_HIGHLIGHT_POST_TAG = "invalid_search_highlight_post_tag"
    INVALID_SEARCH_CROP_MARKER = "invalid_search_crop_marker"
    INVALID_SEARCH_MATCHING_STRATEGY = "invalid_search_matching_strategy"
    BAD_REQUEST = "bad_request"
    DOCUMENT_NOT_FOUND = "document_not_found"
    INTERNAL = "internal"
    INVALID_API_KEY = "invalid_api_key"
    INVALID_API_KEY_DESCRIPTION = "invalid_api_key_description"
    INVALID_API_KEY_ACTIONS = "invalid_api_key_actions"
    INVALID_API_KEY_INDEXES = "invalid_api_key_indexes"
    INVALID_API_KEY_EXPIRES_AT = "invalid_api_key_expires_at"
    API_KEY_NOT_FOUND = "api_key_not_found"
    IMMUTABLE_API_KEY_UID = "immutable_api_key_uid"
    IMMUTABLE_API_KEY_ACTIONS = "immutable_api_key_actions"
    IMMUTABLE_API_KEY_INDEXES = "immutable_api_key_indexes"
    IMMUTABLE_API_KEY_EXPIRES_AT = "immutable_api_key_expires_at"
    IMMUTABLE_API_KEY_CREATED_AT = "immutable_api_key_created_at"
    IMMUTABLE_API_KEY_UPDATED_AT = "immutable_api_key_updated_at"
    MISSING_AUTHORIZATION_HEADER = "missing_authorization_header"
    UNRETRIEVABLE_DOCUMENT = "unretrievable_document"
    MAX_DATABASE_SIZE_LIMIT_REACHED = "database_size_limit_reached"
    TASK_NOT_FOUND = "task_not_found"
    DUMP_PROCESS_FAILED = "dump_process_failed"
    DUMP_NOT_FOUND = "dump_not_found"
    INVALID_SWAP_DUPLICATE_INDEX_FOUND = "invalid_swap_duplicate_index_found"
    INVALID_SWAP_INDEXES = "invalid_swap_indexes"
    MISSING_SWAP_INDEXES = "missing_swap_indexes"
    MISSING_MASTER_KEY = "missing_master_key"
    INVALID_TASK_TYPES = "invalid_task_types"
    INVALID_TASK_UIDS = "invalid_task_uids"
    INVALID_TASK_STATUSES = "invalid_task_statuses"
    INVALID_TASK_LIMIT = "invalid_task_limit"
    INVALID_TASK_FROM = "invalid_task_from"
    INVALID_TASK_CANCELED_BY = "invalid_task_canceled_by"
    MISSING_TASK_FILTERS = "missing_task_filters"
    TOO_MANY_OPEN_FILES = "too_many_open_files"
    IO_ERROR = "io_error"
    INVALID_TASK_INDEX_UIDS = "invalid_task_index_uids"
    IMMUTABLE_INDEX_UID = "immutable_index_uid"
    IMMUTABLE_INDEX_CREATED_AT = "immutable_index_created_at"
    IMMUTABLE_INDEX_UPDATED_AT = "immutable_index_updated_at"
    INVALID_SETTINGS_DISPLAYED_ATTRIBUTES = "invalid_settings_displayed_attributes"
    INVALID_SETTINGS_SEARCHABLE_ATTRIBUTES = "invalid_settings_searchable_attributes"
    INVALID_SETTINGS_FILTERABLE_ATTRIBUTES = "invalid_settings_filterable_attributes"
    INVALID_SETTINGS_SORTABLE_ATTRIBUTES = "invalid_settings_sortable_attributes"
    INVALID_SETTINGS_RANKING_RULES = "invalid_settings_ranking_rules"
    INVALID_SETTINGS_STOP_WORDS = "invalid_settings_stop_words"
    INVALID_SETTINGS_SYNONYMS = "invalid_settings_synonyms"
    INVALID_SETTINGS_DISTINCT_ATTRIBUTE = "invalid_settings_distinct_attribute"
    INVALID_SETTINGS_TYPO_TOLERANCE = "invalid_settings_typo_tolerance"
    INVALID_SETTINGS_FACETING = "invalid_settings_faceting"
    INVALID_SETTINGS_PAGINATION = "invalid_settings_pagination"
    INVALID_TASK_BEFORE_ENQUEUED_AT = "invalid_task_before_enqueued_at"
    INVALID_TASK_AFTER_ENQUEUED_AT = "invalid_task_after_enqueued_at"
    INVALID_TASK_BEFORE_STARTED_AT = "invalid_task_before_started_at"
    INVALID_TASK_AFTER_STARTED_AT = "invalid_task_after_started_at"
    INVALID_TASK_BEFORE_FINISHED_AT = "invalid_task_before_finished_at"
    INVALID_TASK_AFTER_FINISHED_AT = "invalid_task_after_finished_at"
    MISSING_API_KEY_ACTIONS = "missing_api_key_actions"
    MISSING_API_KEY_INDEXES = "missing_api_key_indexes"
    MISSING_API_KEY_EXPIRES_AT = "missing_api_key_expires_at"
    INVALID_API_KEY_LIMIT = "invalid_api_key_limit"
    INVALID_API_KEY_OFFSET = "invalid_api_key_offset"
