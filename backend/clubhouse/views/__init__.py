from clubhouse.views.admin_handlers import (
    add_demo_number as add_demo_number,
)
from clubhouse.views.admin_handlers import (
    list_demo_numbers as list_demo_numbers,
)
from clubhouse.views.admin_handlers import (
    login as login,
)
from clubhouse.views.admin_handlers import (
    logout as logout,
)
from clubhouse.views.admin_handlers import (
    me as me,
)
from clubhouse.views.admin_handlers import (
    pricing_history as pricing_history,
)
from clubhouse.views.admin_handlers import (
    remove_demo_number as remove_demo_number,
)
from clubhouse.views.admin_handlers import (
    update_pricing as update_pricing,
)
from clubhouse.views.player_handlers import (
    add_scores as add_scores,
)
from clubhouse.views.player_handlers import (
    create_game as create_game,
)
from clubhouse.views.player_handlers import (
    create_player as create_player,
)
from clubhouse.views.player_handlers import (
    current_pricing as current_pricing,
)
from clubhouse.views.player_handlers import (
    get_game as get_game,
)
from clubhouse.views.sales_handlers import (
    custom_sales as custom_sales,
)
from clubhouse.views.sales_handlers import (
    dashboard_stats as dashboard_stats,
)
from clubhouse.views.sales_handlers import (
    hourly_sales as hourly_sales,
)
from clubhouse.views.sales_handlers import (
    monthly_sales as monthly_sales,
)
from clubhouse.views.sales_handlers import (
    period_sales as period_sales,
)
from clubhouse.views.sales_handlers import (
    recent_games as recent_games,
)
from clubhouse.views.sales_handlers import (
    transactions as transactions,
)
from clubhouse.views.sales_handlers import (
    weekly_sales as weekly_sales,
)
