from django.urls import include, path

urlpatterns = [
    path("", include("modules.core.urls")),
    # Domain modules, versioned API
    path("v1/", include("modules.orders.urls")),
]

handler404 = "modules.core.views.route_not_found"
