from portfolio.app.models.admin_user import AdminUser
from portfolio.app.models.site_config import SiteConfig
from portfolio.app.models.resume_profile import ResumeProfile, ResumeProfileDevice
from portfolio.app.models.content import (
    Award,
    Experience,
    Game,
    Project,
    Site,
    Skill,
    SocialLink,
)