# pawpal/services/document_store.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from pawpal.utils.datetime_utils import DateTimeUtils

@dataclass
class Document:
    """조회 결과 한 건. id와 필드 딕셔너리로 구성됩니다."""
    id: str
    fields: Dict[str, Any]


class DocumentStore:
    """
    컬렉션 기반 문서 저장소 계약.
    각 도메인 서비스는 이 계약에만 의존하며, 저장소 오류는 감싸지 않고 그대로 전파됩니다.
    """

    def add_document(self, collection_name: str, fields: Dict[str, Any]) -> str:
        """새 문서를 추가하고 저장소가 생성한 문서 ID를 반환합니다."""
        raise NotImplementedError

    def set_document(self, collection_name: str, doc_id: str, fields: Dict[str, Any]):
        """지정한 ID로 문서를 생성하거나 덮어씁니다."""
        raise NotImplementedError

    def get_document(self, collection_name: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def query_documents(self, collection_name: str,
                        filters: Optional[Dict[str, Any]] = None,
                        order_by: Optional[List[str]] = None) -> List[Document]:
        """동등(==) 조건과 오름차순 정렬로 문서 목록을 조회합니다."""
        raise NotImplementedError

    def update_document(self, collection_name: str, doc_id: str, fields: Dict[str, Any]):
        """문서의 일부 필드를 수정합니다. 문서가 없으면 저장소 오류가 발생합니다."""
        raise NotImplementedError

    def delete_document(self, collection_name: str, doc_id: str):
        raise NotImplementedError


class FirestoreDocumentStore(DocumentStore):
    """Firestore(firebase_admin) 기반 문서 저장소 구현체."""

    def __init__(self, client=None):
        self.db = client or firestore.client()

    def add_document(self, collection_name: str, fields: Dict[str, Any]) -> str:
        try:
            doc_ref = self.db.collection(collection_name).document()
            doc_ref.set(DateTimeUtils.for_firestore(fields))
            logging.info(f"Firestore 저장 성공 (Collection: {collection_name}, Doc ID: {doc_ref.id})")
            return doc_ref.id
        except Exception as e:
            logging.error(f"Firestore 저장 실패 (Collection: {collection_name}): {e}", exc_info=True)
            raise

    def set_document(self, collection_name: str, doc_id: str, fields: Dict[str, Any]):
        self.db.collection(collection_name).document(doc_id).set(DateTimeUtils.for_firestore(fields))

    def get_document(self, collection_name: str, doc_id: str) -> Optional[Document]:
        doc = self.db.collection(collection_name).document(doc_id).get()
        if not doc.exists:
            return None
        return Document(id=doc.id, fields=doc.to_dict())

    def query_documents(self, collection_name: str,
                        filters: Optional[Dict[str, Any]] = None,
                        order_by: Optional[List[str]] = None) -> List[Document]:
        #  주의: 동등 조건과 order_by를 함께 쓰는 쿼리(예: vets의 district + name)는
        # Firestore 복합 색인이 필요합니다.
        query = self.db.collection(collection_name)
        for field_name, value in (filters or {}).items():
            query = query.where(filter=FieldFilter(field_name, "==", value))
        for field_name in order_by or []:
            query = query.order_by(field_name)
        return [Document(id=doc.id, fields=doc.to_dict()) for doc in query.stream()]

    def update_document(self, collection_name: str, doc_id: str, fields: Dict[str, Any]):
        self.db.collection(collection_name).document(doc_id).update(DateTimeUtils.for_firestore(fields))
        logging.info(f"Firestore 문서 수정 (Collection: {collection_name}, Doc ID: {doc_id}, fields: {list(fields.keys())})")

    def delete_document(self, collection_name: str, doc_id: str):
        self.db.collection(collection_name).document(doc_id).delete()
        logging.info(f"Firestore 문서 삭제 (Collection: {collection_name}, Doc ID: {doc_id})")
