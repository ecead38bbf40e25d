from django.urls import path
from . import views
from .services import SCOPE_COMPANY, SCOPE_SYSTEM, SCOPE_USER

app_name = 'email-config'


def scope_patterns(scope):
    config_view = views.EmailConfigViewSet.as_view(
        {'get': 'retrieve', 'post': 'create', 'put': 'update', 'patch': 'update', 'delete': 'destroy'},
        scope=scope,
    )
    send_view = views.EmailConfigViewSet.as_view({'post': 'send'}, scope=scope)
    inbox_view = views.EmailConfigViewSet.as_view({'get': 'inbox'}, scope=scope)
    return [
        path(f'{scope}/', config_view, name=f'{scope}-config'),
        path(f'{scope}/send/', send_view, name=f'{scope}-send'),
        path(f'{scope}/inbox/', inbox_view, name=f'{scope}-inbox'),
    ]


urlpatterns = [
    # GET|POST|PUT|DELETE /api/email-config/{scope}/   - Configuration (user, company, system-admin)
    # POST /api/email-config/{scope}/send/             - Send email {to, subject, text?, html?}
    # GET  /api/email-config/{scope}/inbox/?limit=20   - Latest INBOX messages
    *scope_patterns(SCOPE_USER),
    *scope_patterns(SCOPE_COMPANY),
    *scope_patterns(SCOPE_SYSTEM),

    # POST /api/email-config/test/smtp/  - Check SMTP credentials
    # POST /api/email-config/test/imap/  - Check IMAP credentials
    path('test/smtp/', views.smtp_check, name='test-smtp'),
    path('test/imap/', views.imap_check, name='test-imap'),
]
