RESERVATION_BASE = '/api/reservation'
RESERVATION_MY_RESERVATIONS = f'{RESERVATION_BASE}/my_reservations'
RESERVATION_CANCEL = f'{RESERVATION_BASE}/{{reservation_id}}/cancel'
RESERVATION_COLLECT = f'{RESERVATION_BASE}/{{reservation_id}}/collect'
RESERVATION_RETURN = f'{RESERVATION_BASE}/{{reservation_id}}/return'

WAITLIST_BASE = '/api/waitlist'
WAITLIST_MY_WAITLIST = f'{WAITLIST_BASE}/my_waitlist'
WAITLIST_DEVICE = f'{WAITLIST_BASE}/{{device_id}}'
WAITLIST_POSITION = f'{WAITLIST_BASE}/{{device_id}}/position'

USER_ID_HEADER = 'X-User-Id'
