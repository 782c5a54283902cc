from django.urls import path

from .views import XmlRpcView

urlpatterns = [
    path("xmlrpc/", XmlRpcView.as_view(), name="xmlrpc"),
]
