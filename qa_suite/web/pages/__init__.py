from qa_suite.web.pages.base_page import BasePage, FillVerificationError
from qa_suite.web.pages.home_page import HomePage, NewsCard
from qa_suite.web.pages.news_page import NewsPage
from qa_suite.web.pages.team_page import TeamPage

__all__ = [
    "BasePage",
    "FillVerificationError",
    "HomePage",
    "NewsCard",
    "NewsPage",
    "TeamPage",
]
