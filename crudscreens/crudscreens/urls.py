from django.urls import include, path
from django.views.generic import RedirectView

from demo.controllers import ArticleCrud, TagCrud


urlpatterns = [
    path('crud/', include('crud.urls')),
    path('manage/', include(ArticleCrud.admin_menu())),
    path('manage/', include(TagCrud.admin_menu())),
    path('', RedirectView.as_view(pattern_name='crud-article'), name='index'),
]
