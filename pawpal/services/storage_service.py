# pawpal/services/storage_service.py
import uuid
import logging
from datetime import timedelta
from flask import Flask
from firebase_admin import storage

# 업로드 목적(upload_type)별 저장 폴더
UPLOAD_FOLDERS = {
    "pet_image": "pet_images",
}

class StorageService:
    """
    반려동물 사진 업로드를 위한 Firebase Storage 서비스.
    사진 선택/촬영은 모바일 앱이 처리하고, 서버는 업로드 URL 발급과 공개 URL 전환만 담당합니다.
    """

    def __init__(self):
        self.bucket = None

    def init_app(self, app: Flask):
        """create_app에서 한 번 호출되어 Storage 버킷을 설정합니다."""
        bucket_name = app.config.get('FIREBASE_STORAGE_BUCKET')
        if not bucket_name:
            raise ValueError("FIREBASE_STORAGE_BUCKET 설정이 .env 또는 설정 파일에 필요합니다.")

        self.bucket = storage.bucket(bucket_name)
        logging.info("StorageService: Firebase Storage 서비스가 초기화되었습니다.")

    def generate_upload_url(self, user_id: str, upload_type: str, filename: str, content_type: str) -> dict:
        """
        클라이언트가 서버를 거치지 않고 직접 PUT 업로드할 수 있는 Pre-signed URL을 생성합니다.

        :return: 업로드 URL과 저장될 파일 경로
        """
        if not self.bucket:
            raise RuntimeError("StorageService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")

        folder = UPLOAD_FOLDERS.get(upload_type)
        if not folder:
            raise ValueError(f"'{upload_type}'은(는) 유효한 업로드 타입이 아닙니다.")

        extension = filename.rsplit('.', 1)[-1] if '.' in filename else 'jpg'
        destination_blob_name = f"{folder}/{user_id}/{uuid.uuid4()}.{extension}"
        blob = self.bucket.blob(destination_blob_name)

        # 15분 동안 유효한 업로드 전용 URL
        upload_url = blob.generate_signed_url(
            version="v4",
            expiration=timedelta(minutes=15),
            method="PUT",
            content_type=content_type
        )
        return {"upload_url": upload_url, "file_path": destination_blob_name}

    def make_public_and_get_url(self, user_id: str, file_path: str) -> str:
        """
        업로드된 파일을 공개로 전환하고 URL을 반환합니다.
        다른 사용자의 폴더에 있는 파일은 공개할 수 없습니다.
        """
        if not self.bucket:
            raise RuntimeError("StorageService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")
        if not any(file_path.startswith(f"{folder}/{user_id}/") for folder in UPLOAD_FOLDERS.values()):
            raise PermissionError("본인이 업로드한 파일만 공개할 수 있습니다.")

        blob = self.bucket.blob(file_path)
        if not blob.exists():
            raise FileNotFoundError(f"파일을 찾을 수 없습니다: {file_path}")

        blob.make_public()
        return blob.public_url
