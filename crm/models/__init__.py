# Users and auth
from crm.models.users.user_models import User

# Quotations
from crm.models.quotations.quotation_models import Quotation

# Support
from crm.models.support.notification_models import Notification
from crm.models.support.activity_models import UserActivity
