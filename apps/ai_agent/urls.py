from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'ai-agent'

router = SimpleRouter()
router.register(r'conversations', views.ConversationViewSet, basename='conversation')

urlpatterns = [
    # GET|POST|PATCH /api/modules/ai-agent/config/                 - Global configuration (writes: ADMIN)
    path('config/', views.ai_configuration, name='config'),

    # GET    /api/modules/ai-agent/conversations/                  - Own conversations
    # POST   /api/modules/ai-agent/conversations/                  - New conversation
    # GET    /api/modules/ai-agent/conversations/{id}/             - Conversation with messages
    # DELETE /api/modules/ai-agent/conversations/{id}/             - Delete conversation
    # POST   /api/modules/ai-agent/conversations/{id}/messages/    - Send message
    path('', include(router.urls)),

    # Usage
    path('usage/me/', views.my_usage, name='usage-me'),
    path('usage/company/', views.company_usage, name='usage-company'),
    path('usage/all/', views.all_usage, name='usage-all'),

    # Limits
    path('limits/company/<uuid:company_id>/', views.company_limit, name='limit-company'),
    path('limits/user/<uuid:user_id>/', views.user_limit, name='limit-user'),
    path('limits/me/', views.my_limits, name='limits-me'),
]
