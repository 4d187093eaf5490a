from .cards import cards_crud_section
from .bills import bills_section
from .trackers import trackers_section
from .dashboard import dashboard_section
from .yearly import yearly_summary_section
from .compare import compare_section
