from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, List, Optional

from ..base import ToolAgent, tools_from_manifest
from ...config import AgentConfig
from ...memory import KnowledgeStore, ExpirySweeper, MemoryPersistence
from ...memory.persistence import SNAPSHOT_FILENAME
from ...tools.schema import Tool
from .manifest import MANIFEST
from .inputs import (
    StoreKnowledgeInput,
    QueryKnowledgeInput,
    CreateRelationshipInput,
    GetContextInput,
    DeleteKnowledgeInput,
)

logger = logging.getLogger(__name__)


class MemoryAgent(ToolAgent):
    """
    Graph-based knowledge memory exposed over the tool protocol.

    Tools
    -----
    store_knowledge      → KnowledgeStore.store
    query_knowledge      → KnowledgeStore.query
    create_relationship  → KnowledgeStore.create_relationship
    get_context          → KnowledgeStore.get_context
    delete_knowledge     → KnowledgeStore.delete

    When a data directory is configured the store is restored from
    `memory.json` on start and saved after every mutating tool.
    """

    manifest = MANIFEST

    def __init__(
        self,
        config: AgentConfig,
        store: Optional[KnowledgeStore] = None,
    ) -> None:
        super().__init__(config)
        self.store = (
            store if store is not None
            else KnowledgeStore(max_items=config.max_knowledge_items)
        )
        self._sweeper: Optional[ExpirySweeper] = None
        self._save_lock = threading.Lock()

        self._snapshot_path = (
            os.path.join(config.data_directory, SNAPSHOT_FILENAME)
            if config.data_directory
            else None
        )

    # ------------------------------------------------------------------
    # Tool Table
    # ------------------------------------------------------------------

    def build_tools(self) -> List[Tool]:
        return tools_from_manifest(
            self.manifest,
            {
                "store_knowledge": (StoreKnowledgeInput, self._store_knowledge, True),
                "query_knowledge": (QueryKnowledgeInput, self._query_knowledge, False),
                "create_relationship": (CreateRelationshipInput, self._create_relationship, True),
                "get_context": (GetContextInput, self._get_context, False),
                "delete_knowledge": (DeleteKnowledgeInput, self._delete_knowledge, True),
            },
        )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _store_knowledge(self, args: StoreKnowledgeInput) -> Dict[str, Any]:
        return self.store.store(args.key, args.content, args.metadata, args.ttl)

    def _query_knowledge(self, args: QueryKnowledgeInput) -> Dict[str, Any]:
        return self.store.query(
            args.query,
            type=args.query_type,
            limit=args.limit,
            include_metadata=args.include_metadata,
            include_relationships=args.include_relationships,
        )

    def _create_relationship(self, args: CreateRelationshipInput) -> Dict[str, Any]:
        return self.store.create_relationship(
            args.from_key,
            args.to_key,
            args.relationship_type,
            strength=args.strength,
            metadata=args.metadata,
        )

    def _get_context(self, args: GetContextInput) -> Dict[str, Any]:
        return self.store.get_context(
            args.key,
            depth=args.depth,
            relationship_types=args.relationship_types,
            include_content=args.include_content,
            direction=args.direction,
        )

    def _delete_knowledge(self, args: DeleteKnowledgeInput) -> Dict[str, Any]:
        return self.store.delete(args.key)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self._snapshot_path:
            MemoryPersistence.load(self.store, self._snapshot_path)

        if self.config.sweep_interval > 0:
            self._sweeper = ExpirySweeper(self.store, self.config.sweep_interval)
            self._sweeper.start()

        logger.info("[MEMORY AGENT] Ready | knowledge=%d", self.store.count())

    def stop(self) -> None:
        if self._sweeper is not None:
            self._sweeper.stop()
            self._sweeper = None

        self._persist()

    def after_mutation(self, tool_name: str) -> None:
        self._persist()

    def _persist(self) -> None:
        if self._snapshot_path:
            with self._save_lock:
                MemoryPersistence.save(self.store, self._snapshot_path)

    def health_details(self) -> Dict[str, Any]:
        return self.store.stats()
