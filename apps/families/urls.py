from django.urls import path
from . import views

app_name = 'families'

urlpatterns = [
    # POST /api/families/        - Create family (caller becomes owner + member)
    # POST /api/families/join/   - Join family from invite link
    # GET  /api/families/mine/   - Caller's family, members, invite link
    path('', views.create, name='family-create'),
    path('join/', views.join, name='family-join'),
    path('mine/', views.my_family, name='my-family'),
]
