"""
ShopGate Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("policies", views.policies_view),
    path("policies/check", views.check_view),
    path("policies/ability-map", views.ability_map_view),
]
