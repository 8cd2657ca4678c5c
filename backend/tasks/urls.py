from django.urls import path
from .views import list_create_view
from .views import retreive_update_destroy_view
from .views import prioritize_view

urlpatterns=[
    # GET and POST (List tasks and Create new task)
    path('',list_create_view,name="task-list-create"),

    # POST analyze/apply, GET cached results
    path('prioritize/',prioritize_view,name="task-prioritize"),

    # GET, PUT, PATCH, DELETE (Detail and Manipulation)
    path('<uuid:pk>/',retreive_update_destroy_view,name="task-detail")
]
