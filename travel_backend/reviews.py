# ---- REVIEW APIS ----
import logging

from django.db import DatabaseError
from django.db.models import Avg, Count

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Review
from .permissions import FrontendOnlyPermission, IsAdminAccount
from .serializers import ReviewSerializer
from .utilities import generate_review_id

logger = logging.getLogger(__name__)


def _summary(qs):
    agg = qs.aggregate(avg=Avg("rating"), count=Count("review_id"))
    avg = round(float(agg["avg"]), 1) if agg["avg"] is not None else 0
    return {"average_rating": avg, "count": agg["count"] or 0}


class ShowReviewsAPIView(APIView):
    """
    GET /api/reviews?service_id=<id>  (all reviews when omitted)
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        qs = Review.objects.all()
        service_id = request.query_params.get("service_id")
        if service_id:
            qs = qs.filter(service_id=service_id)
        return Response({
            "reviews": ReviewSerializer(qs, many=True).data,
            **_summary(qs),
        }, status=status.HTTP_200_OK)


class SaveReviewAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        serializer = ReviewSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Invalid review", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        user = request.user
        user_id = str(user.pk) if user and user.is_authenticated else ""
        try:
            review = serializer.save(
                review_id=generate_review_id(),
                user_id=user_id,
            )
        except DatabaseError as e:
            logger.exception("Saving review failed")
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"success": True, "review": ReviewSerializer(review).data},
                        status=status.HTTP_201_CREATED)


class EditReviewAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def post(self, request):
        review_id = request.data.get("review_id")
        try:
            review = Review.objects.get(review_id=review_id)
        except Review.DoesNotExist:
            return Response({"error": "Review not found"}, status=status.HTTP_404_NOT_FOUND)

        serializer = ReviewSerializer(review, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response({"error": "Invalid review", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        review = serializer.save()
        return Response({"success": True, "review": ReviewSerializer(review).data}, status=status.HTTP_200_OK)


class DeleteReviewAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def post(self, request):
        review_id = request.data.get("review_id")
        if not review_id:
            return Response({"error": "review_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        deleted, _ = Review.objects.filter(review_id=review_id).delete()
        if not deleted:
            return Response({"error": "Review not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "message": "Review deleted"}, status=status.HTTP_200_OK)
