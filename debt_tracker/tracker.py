"""
Debt Tracker Facade

Ties the store, the view pipeline and the settings together and defines
the flow every user action goes through:

    UI event -> validate -> mutate store -> persist -> recompute view

The presentation layer only talks to DebtTracker. It passes raw form
values in, renders the TrackerView it gets back, and supplies the
`confirm` callback used for destructive actions.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from debt_tracker.config import get_settings
from debt_tracker.events import StoreEventLogger, configure_logging
from debt_tracker.models.debt import (
    DashboardSummary,
    DebtEditForm,
    DebtForm,
    DebtRecord,
    ImportResult,
    SortKey,
    StatusFilter,
    ValidationResult,
    ViewQuery,
)
from debt_tracker.queries import describe_debt, describe_summary, project, summarize
from debt_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from debt_tracker.store import Confirm, DebtStore, DebtStoreInterface
from debt_tracker.store.backup import RawPayload


class TrackerView(BaseModel):
    """Everything the UI needs to render after an action."""

    query: ViewQuery
    records: list[DebtRecord] = Field(
        default_factory=list,
        description="Projected records, in display order"
    )
    summary: DashboardSummary

    @property
    def is_empty(self) -> bool:
        return not self.records


class DebtTracker:
    """
    Application facade over a debt store.

    Holds the current view query so that every mutation can return a
    freshly projected view.
    """

    def __init__(
        self,
        store: DebtStoreInterface,
        default_sort_key: Optional[SortKey] = None,
        currency_symbol: Optional[str] = None,
    ):
        app_settings = get_settings().app
        self._store = store
        self._currency_symbol = currency_symbol or app_settings.currency_symbol
        self._query = ViewQuery(
            sort_key=default_sort_key or app_settings.default_sort_key,
        )

    @property
    def store(self) -> DebtStoreInterface:
        return self._store

    @property
    def query(self) -> ViewQuery:
        return self._query

    # -------------------------------------------------------------------------
    # View
    # -------------------------------------------------------------------------

    def set_query(
        self,
        search_text: Optional[str] = None,
        status_filter: Optional[Union[StatusFilter, str]] = None,
        sort_key: Optional[Union[SortKey, str]] = None,
    ) -> TrackerView:
        """Change search / filter / sort; arguments left as None are kept."""
        updates = {}
        if search_text is not None:
            updates["search_text"] = search_text
        if status_filter is not None:
            updates["status_filter"] = status_filter
        if sort_key is not None:
            updates["sort_key"] = sort_key
        self._query = ViewQuery.model_validate({**self._query.model_dump(), **updates})
        return self.view()

    def view(self) -> TrackerView:
        records = self._store.records
        return TrackerView(
            query=self._query,
            records=project(records, self._query),
            summary=summarize(records),
        )

    def render(self) -> dict:
        """Current view as display text: dashboard figures and debt cards."""
        current = self.view()
        return {
            "dashboard": describe_summary(current.summary, self._currency_symbol),
            "debts": [describe_debt(r, self._currency_symbol) for r in current.records],
            "empty": current.is_empty,
        }

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def add_debt(
        self,
        form: Union[DebtForm, dict],
    ) -> tuple[Optional[DebtRecord], ValidationResult, TrackerView]:
        record, result = self._store.create(form)
        return record, result, self.view()

    def edit_debt(
        self,
        debt_id: str,
        form: Union[DebtEditForm, dict],
    ) -> tuple[Optional[DebtRecord], ValidationResult, TrackerView]:
        record, result = self._store.update(debt_id, form)
        return record, result, self.view()

    def toggle_status(self, debt_id: str) -> TrackerView:
        self._store.toggle_status(debt_id)
        return self.view()

    def delete_debt(self, debt_id: str, confirm: Confirm) -> tuple[bool, TrackerView]:
        removed = self._store.delete(debt_id, confirm)
        return removed, self.view()

    def clear_all(self, confirm: Confirm) -> tuple[bool, TrackerView]:
        cleared = self._store.clear_all(confirm)
        return cleared, self.view()

    def import_backup(
        self,
        raw_payload: RawPayload,
        confirm: Confirm,
    ) -> tuple[ImportResult, TrackerView]:
        """
        Raises:
            ImportFormatError: If the payload is malformed
        """
        result = self._store.import_replace(raw_payload, confirm)
        return result, self.view()

    def import_backup_file(
        self,
        path: Union[str, Path],
        confirm: Confirm,
    ) -> tuple[ImportResult, TrackerView]:
        """
        Raises:
            ImportFormatError: If the file is unreadable or malformed
        """
        if not isinstance(self._store, DebtStore):
            raise TypeError("File import needs a local DebtStore")
        result = self._store.import_file(path, confirm)
        return result, self.view()

    def export_backup(self, directory: Union[str, Path], on: Optional[date] = None) -> Path:
        if not isinstance(self._store, DebtStore):
            raise TypeError("File export needs a local DebtStore")
        return self._store.export_to_file(directory, on)


def create_storage(backend: Optional[str] = None) -> KeyValueStorageInterface:
    """Key-value storage for the configured backend."""
    storage_settings = get_settings().storage
    backend = backend or storage_settings.backend
    if backend == "memory":
        return InMemoryKeyValueStorage()
    if backend == "file":
        return JsonFileKeyValueStorage(storage_settings.data_dir)
    raise ValueError(f"Unknown storage backend: {backend}")


def create_tracker(
    storage: Optional[KeyValueStorageInterface] = None,
    setup_logging: bool = True,
) -> DebtTracker:
    """
    Factory function to create a ready-to-use tracker.

    Args:
        storage: Key-value backend. Defaults to the configured one.
        setup_logging: Configure structlog from settings first.

    Returns:
        DebtTracker over a freshly loaded DebtStore
    """
    app_settings = get_settings().app
    if setup_logging:
        configure_logging(app_settings.log_level, app_settings.log_format)

    store = DebtStore(
        storage=storage or create_storage(),
        event_logger=StoreEventLogger(),
    )
    return DebtTracker(store)
