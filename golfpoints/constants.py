"""Constants and default points schedules for the points engine."""

# Tournament categories
MAJOR = 'major'
TOUR = 'tour'
LEAGUE = 'league'
SUPR = 'supr'

CATEGORIES = (MAJOR, TOUR, LEAGUE, SUPR)

# Scoring tracks and recalculation modes
NET = 'net'
GROSS = 'gross'
BOTH = 'both'

TRACKS = (NET, GROSS)
MODES = (NET, GROSS, BOTH)

# Gross points are always paid from the Tour schedule
GROSS_POINTS_CATEGORY = TOUR

# Stored row fields per track: (position field, points field, score field)
TRACK_FIELDS = {
    NET: ('position', 'points', 'net_score'),
    GROSS: ('gross_position', 'gross_points', 'gross_score'),
}

# Leaderboard ranks on a player's best N events
BEST_EVENTS_COUNT = 8

# Process-wide recalculation history kept for the admin log view
RECENT_LOG_LIMIT = 200

DEFAULT_LOCK_TIMEOUT_SECONDS = 30.0

# Leaderboard totals are rounded to the finest schedule value (e.g. 40.625)
TOTAL_POINTS_PLACES = 3

MAJOR_POINTS = [
    750, 400, 350, 325, 300, 275, 225, 200, 175, 150,  # 1-10
    130, 120, 110, 90, 80, 70, 65, 60, 55, 50,  # 11-20
    48, 46, 44, 42, 40, 38, 36, 34, 32.5, 31,  # 21-30
    29.5, 28, 26.5, 25, 24, 23, 22, 21, 20.25, 19.5,  # 31-40
    18.75, 18, 17.25, 16.5, 15.75, 15, 14.25, 13.5, 13, 12.5,  # 41-50
    12, 11.5, 11, 10.5, 10, 9.5, 9, 8.5, 8, 7.75,  # 51-60
    7.5, 7.25, 7,  # 61-63
]

TOUR_POINTS = [
    500, 300, 190, 135, 110, 100, 90, 85, 80, 75,  # 1-10
    70, 65, 60, 55, 53, 51, 49, 47, 45, 43,  # 11-20
    41, 39, 37, 35.5, 34, 32.5, 31, 29.5, 28, 26.5,  # 21-30
    25, 23.5, 22, 21, 20, 19, 18, 17, 16, 15,  # 31-40
    14, 13, 12, 11, 10.5, 10, 9.5, 9, 8.5, 8,  # 41-50
    7.5, 7, 6.5, 6, 5.8, 5.6, 5.4, 5.2, 5, 4.8,  # 51-60
    4.6, 4.4, 4.2, 4, 3.8,  # 61-65
]

# League and SUPR events share one schedule
LEAGUE_SUPR_POINTS = [
    93.75, 50, 43.75, 40.625, 37.5, 34.375, 28.125, 25, 21.875, 18.75,  # 1-10
    16.25, 15, 13.75, 11.25, 10, 8.75, 8.125, 7.5, 6.875, 6,  # 11-20
]

DEFAULT_POINTS = {
    MAJOR: MAJOR_POINTS,
    TOUR: TOUR_POINTS,
    LEAGUE: LEAGUE_SUPR_POINTS,
    SUPR: LEAGUE_SUPR_POINTS,
}
