from apps.trips.models import Trip

TRIPS_URL = '/api/v1/trips/'


def test_member_creates_trip(client_for, bob, group):
    response = client_for(bob).post(TRIPS_URL, {
        'groupId': str(group.id),
        'name': 'Porto',
        'destination': 'Porto, Portugal',
        'startDate': '2026-06-01',
        'endDate': '2026-06-05',
    }, format='json')

    assert response.status_code == 201
    data = response.data['data']
    assert data['status'] == 'PLANNING'
    assert data['createdBy'] == str(bob.id)


def test_viewer_cannot_create_trip(client_for, dave, group):
    response = client_for(dave).post(TRIPS_URL, {'groupId': str(group.id), 'name': 'Porto'}, format='json')
    assert response.status_code == 400
    assert 'groupId' in response.data['error']['details']


def test_end_date_before_start_date(client, group):
    response = client.post(TRIPS_URL, {
        'groupId': str(group.id),
        'name': 'Porto',
        'startDate': '2026-06-05',
        'endDate': '2026-06-01',
    }, format='json')
    assert response.status_code == 400
    assert 'endDate' in response.data['error']['details']


def test_list_trips_filtered_by_status(client, trip, group, alice):
    Trip.objects.create(group=group, name='Madrid', created_by=alice, status=Trip.Status.COMPLETED)

    response = client.get(TRIPS_URL, {'status': 'COMPLETED'})
    assert [t['name'] for t in response.data['data']] == ['Madrid']


def test_viewer_can_read_but_not_edit(client_for, dave, trip):
    viewer = client_for(dave)
    assert viewer.get(f'{TRIPS_URL}{trip.id}/').status_code == 200
    assert viewer.patch(f'{TRIPS_URL}{trip.id}/', {'name': 'Faro'}, format='json').status_code == 403


def test_member_updates_status(client_for, bob, trip):
    response = client_for(bob).patch(f'{TRIPS_URL}{trip.id}/', {'status': 'CONFIRMED'}, format='json')
    assert response.status_code == 200
    assert response.data['data']['status'] == 'CONFIRMED'


def test_only_admins_delete_trips(client, client_for, bob, trip):
    assert client_for(bob).delete(f'{TRIPS_URL}{trip.id}/').status_code == 403
    assert client.delete(f'{TRIPS_URL}{trip.id}/').status_code == 200
    assert not Trip.objects.exists()
