from django.urls import path

from .admins import (
    BootstrapSuperAdminAPIView, DeleteAdminUserAPIView, ManageAdminAPIView, ShowAdminAPIView,
)
from .booking import (
    CheckoutConfigAPIView, ConfirmPaymentAPIView, CreateReservationAPIView, ShowBookingsAPIView,
    ShowReservationAPIView, SubmitInquiryAPIView, UpdateBookingsAPIView,
)
from .catalog import (
    ShowBestOffersAPIView, ShowCategoryServicesAPIView, TransportLocationsAPIView, TransportPriceAPIView,
)
from .category import DuplicateCategoryAPIView, SaveCategoriesAPIView, ShowCategoryAPIView
from .email_templates import (
    SaveEmailTemplateAPIView, ShowAdminEmailTemplateAPIView, ShowClientEmailTemplateAPIView,
)
from .media import DeleteMediaAPIView, MediaStatusAPIView, ShowMediaAPIView, UploadMediaAPIView
from .reviews import DeleteReviewAPIView, EditReviewAPIView, SaveReviewAPIView, ShowReviewsAPIView
from .service import (
    DeleteServiceAPIView, DuplicateServiceAPIView, SaveAllServicesAPIView, SaveServiceAPIView,
    ShowServicesAPIView, ToggleServiceAPIView,
)
from .site_settings import SaveSettingsAPIView, ShowSettingsAPIView

urlpatterns = [
    # Storefront
    path('settings', ShowSettingsAPIView.as_view(), name='settings'),
    path('services/<slug:category_id>', ShowCategoryServicesAPIView.as_view(), name='category-services'),
    path('best-offers', ShowBestOffersAPIView.as_view(), name='best-offers'),
    path('transport-price', TransportPriceAPIView.as_view(), name='transport-price'),
    path('transport-locations', TransportLocationsAPIView.as_view(), name='transport-locations'),
    path('reviews', ShowReviewsAPIView.as_view(), name='reviews'),
    path('save-review', SaveReviewAPIView.as_view(), name='save-review'),
    path('email-template', ShowAdminEmailTemplateAPIView.as_view(), name='email-template'),
    path('client-email-template', ShowClientEmailTemplateAPIView.as_view(), name='client-email-template'),

    # Booking
    path('reservations', CreateReservationAPIView.as_view(), name='create-reservation'),
    path('reservations/<str:reservation_id>', ShowReservationAPIView.as_view(), name='show-reservation'),
    path('reservations/<str:reservation_id>/confirm-payment', ConfirmPaymentAPIView.as_view(), name='confirm-payment'),
    path('checkout/config', CheckoutConfigAPIView.as_view(), name='checkout-config'),
    path('inquiries', SubmitInquiryAPIView.as_view(), name='submit-inquiry'),

    # Media library
    path('media', ShowMediaAPIView.as_view(), name='media'),
    path('media/upload', UploadMediaAPIView.as_view(), name='media-upload'),
    path('media/delete', DeleteMediaAPIView.as_view(), name='media-delete'),
    path('media/status', MediaStatusAPIView.as_view(), name='media-status'),

    # Admin accounts
    path('delete-admin-user', DeleteAdminUserAPIView.as_view(), name='delete-admin-user'),
    path('admin/show-admins', ShowAdminAPIView.as_view(), name='show-admins'),
    path('admin/manage-admin', ManageAdminAPIView.as_view(), name='manage-admin'),
    path('admin/bootstrap-superadmin', BootstrapSuperAdminAPIView.as_view(), name='bootstrap-superadmin'),

    # Admin catalog
    path('admin/show-services', ShowServicesAPIView.as_view(), name='show-services'),
    path('admin/save-service', SaveServiceAPIView.as_view(), name='save-service'),
    path('admin/save-all-services', SaveAllServicesAPIView.as_view(), name='save-all-services'),
    path('admin/duplicate-service', DuplicateServiceAPIView.as_view(), name='duplicate-service'),
    path('admin/toggle-service', ToggleServiceAPIView.as_view(), name='toggle-service'),
    path('admin/delete-service', DeleteServiceAPIView.as_view(), name='delete-service'),
    path('admin/show-categories', ShowCategoryAPIView.as_view(), name='show-categories'),
    path('admin/save-categories', SaveCategoriesAPIView.as_view(), name='save-categories'),
    path('admin/duplicate-category', DuplicateCategoryAPIView.as_view(), name='duplicate-category'),

    # Admin reviews / bookings / settings
    path('admin/edit-review', EditReviewAPIView.as_view(), name='edit-review'),
    path('admin/delete-review', DeleteReviewAPIView.as_view(), name='delete-review'),
    path('admin/show-bookings', ShowBookingsAPIView.as_view(), name='show-bookings'),
    path('admin/update-bookings', UpdateBookingsAPIView.as_view(), name='update-bookings'),
    path('admin/save-settings', SaveSettingsAPIView.as_view(), name='save-settings'),
    path('admin/save-email-template/<str:kind>', SaveEmailTemplateAPIView.as_view(), name='save-email-template'),
]
