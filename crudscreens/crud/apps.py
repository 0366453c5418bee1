from django.apps import AppConfig


class CrudConfig(AppConfig):
    name = 'crud'
    verbose_name = 'CRUD screens'

    def ready(self):
        from crud import assets
        assets.register()
