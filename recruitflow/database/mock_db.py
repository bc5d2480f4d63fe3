from typing import Dict, Any, Optional, List, Callable
import copy
import logging
import uuid

logger = logging.getLogger(__name__)


class MockDB:
    """
    In-memory document store for development and testing
    Documents are keyed by their "id" field, which is generated when missing
    """

    # In-memory storage
    _collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    @classmethod
    def create_document(cls, collection_name: str, document_data: Dict[str, Any]) -> str:
        """
        Create a new document in a collection
        Returns the document ID
        """
        if collection_name not in cls._collections:
            cls._collections[collection_name] = {}

        doc_id = document_data.get("id") or str(uuid.uuid4())
        document = copy.deepcopy(document_data)
        document["id"] = doc_id
        cls._collections[collection_name][doc_id] = document

        logger.debug(f"MockDB: Created document {doc_id} in collection {collection_name}")
        return doc_id

    @classmethod
    def get_document(cls, collection_name: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a copy of a document by its ID
        """
        document = cls._collections.get(collection_name, {}).get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    @classmethod
    def get_all_documents(cls, collection_name: str) -> List[Dict[str, Any]]:
        """
        Get copies of all documents in a collection
        """
        return [copy.deepcopy(doc) for doc in cls._collections.get(collection_name, {}).values()]

    @classmethod
    def find_documents(cls, collection_name: str, predicate: Callable[[Dict[str, Any]], bool]) -> List[Dict[str, Any]]:
        """
        Get copies of the documents in a collection matching a predicate
        """
        return [doc for doc in cls.get_all_documents(collection_name) if predicate(doc)]

    @classmethod
    def update_document(cls, collection_name: str, doc_id: str, data: Dict[str, Any]) -> None:
        """
        Update a document in a collection
        """
        if collection_name not in cls._collections or doc_id not in cls._collections[collection_name]:
            raise ValueError(f"Document {doc_id} not found in collection {collection_name}")

        cls._collections[collection_name][doc_id].update(copy.deepcopy(data))

    @classmethod
    def clear(cls) -> None:
        """
        Clear all data (for testing)
        """
        cls._collections = {}
