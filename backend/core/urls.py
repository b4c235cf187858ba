from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from shared.views import HealthCheckView

admin.site.site_header = "Donation administration"
admin.site.site_title = "Donation administration"

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='swagger-ui', permanent=False), name='home'),
    path('admin/', admin.site.urls),
    # API schema & docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/health', HealthCheckView.as_view(), name='health-check'),
    path('api/', include('apps.companies.urls')),
    path('api/', include('apps.ngo.urls')),
]
