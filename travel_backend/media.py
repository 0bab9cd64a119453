# ---- MEDIA LIBRARY APIS (Cloudinary) ----
# Standard Library
import logging
from functools import lru_cache
from io import BytesIO

# Third-party
import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from cloudinary.utils import cloudinary_url
from PIL import Image as PILImage, UnidentifiedImageError

# Django
from django.conf import settings

# Django REST Framework
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .permissions import IsAdminAccount

logger = logging.getLogger(__name__)

LIST_LIMIT = 50
IMAGE_TRANSFORMATIONS = "w_auto,c_scale,f_auto,q_auto"
VIDEO_TRANSFORMATIONS = "f_auto,vc_auto"
VIDEO_THUMBNAIL = {"crop": "thumb", "width": 300, "height": 300}


class MediaError(Exception):
    pass


class MediaNotConfigured(MediaError):
    pass


def media_configured():
    return all([
        settings.CLOUDINARY_CLOUD_NAME,
        settings.CLOUDINARY_API_KEY,
        settings.CLOUDINARY_API_SECRET,
    ])


def optimized_url(secure_url, resource_type):
    """
    Insert the delivery transformations right after `/upload/`.
    """
    if "/upload/" not in (secure_url or ""):
        return secure_url
    if resource_type == "image":
        transformations = IMAGE_TRANSFORMATIONS
    elif resource_type == "video":
        transformations = VIDEO_TRANSFORMATIONS
    else:
        return secure_url
    base, path_with_version = secure_url.split("/upload/", 1)
    return f"{base}/upload/{transformations}/{path_with_version}"


def validate_image_upload(file_obj):
    """
    Images must decode with Pillow; other content types (video) pass through.
    """
    content_type = getattr(file_obj, "content_type", "") or ""
    if not content_type.startswith("image/"):
        return
    try:
        data = file_obj.read()
        img = PILImage.open(BytesIO(data))
        img.load()  # force decode to catch truncated files early
    except (UnidentifiedImageError, OSError) as e:
        raise MediaError(f"Invalid image: {e}") from e
    finally:
        file_obj.seek(0)


class CloudinaryClient:
    """
    Folder-scoped wrapper over the Cloudinary SDK; SDK errors surface as MediaError.
    """
    def __init__(self, folder="triplanner", timeout=15):
        self.folder = folder
        self.timeout = timeout

    def thumbnail_url(self, public_id):
        url, _ = cloudinary_url(public_id, resource_type="video", format="jpg",
                                transformation=[VIDEO_THUMBNAIL], secure=True)
        return url

    def list(self, limit=LIST_LIMIT):
        try:
            result = (
                cloudinary.Search()
                .expression(f"folder:{self.folder}")
                .sort_by("created_at", "desc")
                .max_results(limit)
                .execute()
            )
        except CloudinaryError as e:
            raise MediaError(f"Media listing failed: {e}") from e

        media = []
        for res in result.get("resources", []):
            item = dict(res)
            if res.get("resource_type") == "video":
                item["thumbnail_url"] = self.thumbnail_url(res.get("public_id", ""))
            else:
                item["thumbnail_url"] = res.get("secure_url", "")
            media.append(item)
        return media

    def upload(self, file_obj):
        try:
            result = cloudinary.uploader.upload(
                file_obj, folder=self.folder, resource_type="auto", timeout=self.timeout,
            )
        except CloudinaryError as e:
            raise MediaError(f"Upload failed: {e}") from e

        return {
            "url": optimized_url(result.get("secure_url", ""), result.get("resource_type")),
            "public_id": result.get("public_id", ""),
            "resource_type": result.get("resource_type", ""),
        }

    def destroy(self, public_id, resource_type="image"):
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type, timeout=self.timeout)
        except CloudinaryError as e:
            raise MediaError(f"Delete failed: {e}") from e
        return result.get("result", "")


@lru_cache(maxsize=1)
def get_media_client():
    if not media_configured():
        raise MediaNotConfigured("Cloudinary credentials are not set.")
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )
    return CloudinaryClient(folder=settings.MEDIA_FOLDER, timeout=settings.HTTP_TIMEOUT)


def _not_configured():
    return Response({"error": "Media library is not configured."}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class MediaStatusAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def get(self, request):
        return Response({"configured": media_configured()}, status=status.HTTP_200_OK)


class ShowMediaAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def get(self, request):
        try:
            media = get_media_client().list()
        except MediaNotConfigured:
            return _not_configured()
        except MediaError:
            logger.exception("Failed to fetch media")
            return Response({"error": "Failed to fetch media."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"media": media}, status=status.HTTP_200_OK)


class UploadMediaAPIView(APIView):
    permission_classes = [IsAdminAccount]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        """
        Accepts:
          - multipart: field name 'file' (image or video)
        """
        file_obj = request.FILES.get("file")
        if not file_obj:
            return Response({"error": "No file provided."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            validate_image_upload(file_obj)
        except MediaError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = get_media_client().upload(file_obj)
        except MediaNotConfigured:
            return _not_configured()
        except MediaError:
            logger.exception("Upload of %s failed", getattr(file_obj, "name", ""))
            return Response({"error": "Upload failed."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(result, status=status.HTTP_200_OK)


class DeleteMediaAPIView(APIView):
    permission_classes = [IsAdminAccount]
    parser_classes = [JSONParser, FormParser]

    def post(self, request):
        public_id = (request.data.get("public_id") or request.data.get("publicId") or "").strip()
        if not public_id:
            return Response({"error": "Public ID is required."}, status=status.HTTP_400_BAD_REQUEST)
        resource_type = request.data.get("resource_type") or "image"

        try:
            result = get_media_client().destroy(public_id, resource_type=resource_type)
        except MediaNotConfigured:
            return _not_configured()
        except MediaError:
            logger.exception("Failed to delete media %s", public_id)
            return Response({"error": "Failed to delete media."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"result": result}, status=status.HTTP_200_OK)
