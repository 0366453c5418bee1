from django.urls import path

from crud import assets

urlpatterns = [
    path('res/', assets.res, name='crud-res'),
]
