"""End-to-end tests of the v1 API through DRF's test client."""

from uuid import uuid4

import pytest
from rest_framework.test import APIClient

pytestmark = pytest.mark.django_db

BASE = '/api/v1'


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def customer(client):
    response = client.post(f'{BASE}/customers/', {
        'name': 'Maria Souza',
        'document_type': 'CPF',
        'document': '123.456.789-09',
        'email': 'Maria@Example.com',
        'phone': '11987654321',
    }, format='json')
    assert response.status_code == 201, response.data
    return response.json()


@pytest.fixture
def vehicle(client, customer):
    response = client.post(f'{BASE}/vehicles/', {
        'customer_id': customer['id'],
        'license_plate': 'abc-1234',
        'brand': 'Volkswagen',
        'model': 'Gol',
        'year': 2018,
    }, format='json')
    assert response.status_code == 201, response.data
    return response.json()


@pytest.fixture
def service(client):
    response = client.post(f'{BASE}/services/', {
        'name': 'Troca de oleo',
        'estimated_duration': 30,
        'price': '150.00',
        'category': 'MAINTENANCE',
    }, format='json')
    assert response.status_code == 201, response.data
    return response.json()


@pytest.fixture
def part(client):
    response = client.post(f'{BASE}/parts/', {
        'name': 'Filtro de oleo',
        'part_number': 'FLT-001',
        'price': '45.00',
        'stock_quantity': 10,
    }, format='json')
    assert response.status_code == 201, response.data
    return response.json()


@pytest.fixture
def order(client, customer, vehicle, service, part):
    response = client.post(f'{BASE}/service-orders/', {
        'customer_id': customer['id'],
        'vehicle_id': vehicle['id'],
        'description': 'Revisao dos 40 mil km',
        'services': [{'service_id': service['id'], 'quantity': 1}],
        'parts': [{'part_id': part['id'], 'quantity': 2}],
        'created_by': 'clerk',
    }, format='json')
    assert response.status_code == 201, response.data
    return response.json()


def move(client, order, status, **extra):
    return client.post(
        f"{BASE}/service-orders/{order['id']}/status/", {'status': status, **extra}, format='json'
    )


class TestCustomersApi:

    def test_register_normalizes(self, customer):
        assert customer['document'] == '12345678909'
        assert customer['document_formatted'] == '123.456.789-09'
        assert customer['email'] == 'maria@example.com'
        assert customer['is_active'] is True

    def test_invalid_document(self, client):
        response = client.post(f'{BASE}/customers/', {
            'name': 'Jose', 'document_type': 'CPF', 'document': '11111111111',
            'email': 'jose@example.com', 'phone': '11987654321',
        }, format='json')
        assert response.status_code == 400
        assert response.json()['error'] == 'INVALID_DOCUMENT'

    def test_duplicate_document(self, client, customer):
        response = client.post(f'{BASE}/customers/', {
            'name': 'Outra Maria', 'document_type': 'CPF', 'document': '12345678909',
            'email': 'outra@example.com', 'phone': '11987654321',
        }, format='json')
        assert response.status_code == 409
        assert response.json()['error'] == 'ENTITY_ALREADY_EXISTS'

    def test_missing_fields(self, client):
        response = client.post(f'{BASE}/customers/', {'name': 'Maria'}, format='json')
        body = response.json()
        assert response.status_code == 400
        assert body['error'] == 'VALIDATION_ERROR'
        assert 'document' in body['details']

    def test_partial_update(self, client, customer):
        response = client.patch(f"{BASE}/customers/{customer['id']}/", {'city': 'Santos'}, format='json')
        assert response.status_code == 200
        assert response.json()['city'] == 'Santos'

    def test_delete_deactivates(self, client, customer):
        response = client.delete(f"{BASE}/customers/{customer['id']}/")
        assert response.status_code == 204
        assert client.get(f"{BASE}/customers/{customer['id']}/").json()['is_active'] is False
        assert client.get(f'{BASE}/customers/', {'active': 'true'}).json()['count'] == 0
        assert client.get(f'{BASE}/customers/', {'active': 'false'}).json()['count'] == 1

    def test_malformed_active_filter(self, client, customer):
        response = client.get(f'{BASE}/customers/', {'active': 'yes-please'})
        assert response.status_code == 400
        body = response.json()
        assert body['error'] == 'VALIDATION_ERROR'
        assert 'active' in body['details']

    def test_unknown_customer(self, client):
        response = client.get(f'{BASE}/customers/{uuid4()}/')
        assert response.status_code == 404
        assert response.json()['error'] == 'ENTITY_NOT_FOUND'

    def test_customer_vehicles(self, client, customer, vehicle):
        response = client.get(f"{BASE}/customers/{customer['id']}/vehicles/")
        assert [v['id'] for v in response.json()] == [vehicle['id']]


class TestVehiclesApi:

    def test_plate_normalized(self, vehicle):
        assert vehicle['license_plate'] == 'ABC1234'
        assert vehicle['license_plate_formatted'] == 'ABC-1234'

    def test_invalid_plate(self, client, customer):
        response = client.post(f'{BASE}/vehicles/', {
            'customer_id': customer['id'], 'license_plate': 'AB1234',
            'brand': 'Fiat', 'model': 'Uno', 'year': 2010,
        }, format='json')
        assert response.status_code == 400
        assert response.json()['error'] == 'INVALID_FORMAT'

    def test_filter_by_customer(self, client, customer, vehicle):
        response = client.get(f'{BASE}/vehicles/', {'customer_id': customer['id']})
        assert len(response.json()) == 1

    def test_bad_customer_filter(self, client):
        response = client.get(f'{BASE}/vehicles/', {'customer_id': 'not-a-uuid'})
        assert response.status_code == 400


class TestCatalogApi:

    def test_services_by_category(self, client, service):
        response = client.get(f'{BASE}/services/', {'category': 'MAINTENANCE'})
        body = response.json()
        assert body['count'] == 1
        assert body['results'][0]['price'] == '150.00'

    def test_unknown_category_filter(self, client, service):
        response = client.get(f'{BASE}/services/', {'category': 'TUNING'})
        assert response.status_code == 400
        assert 'category' in response.json()['details']

    def test_malformed_part_active_filter(self, client, part):
        assert client.get(f'{BASE}/parts/', {'active': 'maybe'}).status_code == 400
        assert client.get(f'{BASE}/parts/', {'active': '1'}).json()['count'] == 1

    def test_stock_adjustment_and_low_stock(self, client, part):
        response = client.post(f"{BASE}/parts/{part['id']}/stock/",
                               {'operation': 'remove', 'quantity': 6}, format='json')
        assert response.status_code == 200
        assert response.json()['stock_quantity'] == 4
        low = client.get(f'{BASE}/parts/low-stock/').json()
        assert [p['id'] for p in low] == [part['id']]

    def test_overdraw_stock(self, client, part):
        response = client.post(f"{BASE}/parts/{part['id']}/stock/",
                               {'operation': 'remove', 'quantity': 11}, format='json')
        assert response.status_code == 422
        assert response.json()['error'] == 'INSUFFICIENT_STOCK'


class TestServiceOrdersApi:

    def test_create(self, order):
        assert order['order_number'] == 'OS000001'
        assert order['status'] == 'RECEIVED'
        assert order['total_amount'] == '240.00'
        assert order['created_by'] == 'clerk'
        assert len(order['status_history']) == 1
        assert order['allowed_next_statuses'] == ['CANCELLED', 'IN_DIAGNOSIS']

    def test_vehicle_checked_before_services(self, client, customer):
        response = client.post(f'{BASE}/service-orders/', {
            'customer_id': customer['id'],
            'vehicle_id': str(uuid4()),
            'description': 'Revisao geral',
            'services': [{'service_id': str(uuid4())}],
        }, format='json')
        assert response.status_code == 404
        assert response.json()['details']['entity_type'] == 'Vehicle'

    def test_insufficient_stock(self, client, customer, vehicle, part):
        response = client.post(f'{BASE}/service-orders/', {
            'customer_id': customer['id'],
            'vehicle_id': vehicle['id'],
            'description': 'Troca de filtros',
            'parts': [{'part_id': part['id'], 'quantity': 11}],
        }, format='json')
        assert response.status_code == 422
        assert response.json()['details']['available_quantity'] == 10
        assert client.get(f'{BASE}/service-orders/').json()['count'] == 0

    def test_lifecycle(self, client, order):
        assert move(client, order, 'IN_DIAGNOSIS', changed_by='joao').status_code == 200
        assert move(client, order, 'AWAITING_APPROVAL', reason='Orcamento enviado').status_code == 200

        response = client.post(f"{BASE}/service-orders/{order['id']}/approve/",
                               {'approved_by': 'Maria Souza'}, format='json')
        assert response.status_code == 200
        approved = response.json()
        assert approved['status'] == 'APPROVED'
        assert approved['approved_amount'] == '240.00'
        assert approved['is_approved'] is True

        for status in ('IN_PROGRESS', 'COMPLETED', 'DELIVERED'):
            assert move(client, order, status).status_code == 200

        final = client.get(f"{BASE}/service-orders/{order['id']}/").json()
        assert final['status'] == 'DELIVERED'
        assert final['actual_completion'] is not None
        assert [h['new_status'] for h in final['status_history']] == [
            'RECEIVED', 'IN_DIAGNOSIS', 'AWAITING_APPROVAL', 'APPROVED',
            'IN_PROGRESS', 'COMPLETED', 'DELIVERED',
        ]

    def test_invalid_transition(self, client, order):
        response = move(client, order, 'COMPLETED')
        assert response.status_code == 422
        body = response.json()
        assert body['error'] == 'INVALID_STATUS_TRANSITION'
        assert body['details']['current_status'] == 'RECEIVED'

    def test_unknown_status_value(self, client, order):
        response = move(client, order, 'FINISHED')
        assert response.status_code == 400

    def test_early_approval(self, client, order):
        response = client.post(f"{BASE}/service-orders/{order['id']}/approve/",
                               {'approved_by': 'Maria Souza'}, format='json')
        assert response.status_code == 422
        assert response.json()['error'] == 'ILLEGAL_APPROVAL'

    def test_observations_assign_and_update(self, client, order):
        url = f"{BASE}/service-orders/{order['id']}"
        client.post(f'{url}/observations/', {'text': 'Cliente aguarda'}, format='json')
        client.post(f'{url}/assign/', {'assigned_to': 'joao'}, format='json')
        response = client.patch(f'{url}/', {'diagnosis': 'Filtro saturado', 'priority': 'HIGH'},
                                format='json')
        body = response.json()
        assert body['observations'] == 'Cliente aguarda'
        assert body['assigned_to'] == 'joao'
        assert body['diagnosis'] == 'Filtro saturado'
        assert body['priority'] == 'HIGH'

    def test_update_total_amount(self, client, order):
        url = f"{BASE}/service-orders/{order['id']}/"
        response = client.patch(url, {'total_amount': '640.00'}, format='json')
        assert response.status_code == 200
        assert response.json()['total_amount'] == '640.00'

        rejected = client.patch(url, {'total_amount': '-5.00'}, format='json')
        assert rejected.status_code == 400
        assert client.get(url).json()['total_amount'] == '640.00'

    def test_by_number(self, client, order):
        response = client.get(f'{BASE}/service-orders/by-number/OS000001/')
        assert response.json()['id'] == order['id']

    def test_list_filters(self, client, order, customer):
        assert client.get(f'{BASE}/service-orders/', {'status': 'RECEIVED'}).json()['count'] == 1
        assert client.get(f'{BASE}/service-orders/', {'customer_id': str(uuid4())}).json()['count'] == 0
        nested = client.get(f"{BASE}/customers/{customer['id']}/service-orders/").json()
        assert nested['results'][0]['order_number'] == 'OS000001'

    def test_malformed_list_filters(self, client, order):
        for params in ({'status': 'FINISHED'}, {'customer_id': 'abc'}, {'vehicle_id': '123'}):
            response = client.get(f'{BASE}/service-orders/', params)
            assert response.status_code == 400, params
            assert response.json()['error'] == 'VALIDATION_ERROR'

    def test_metrics(self, client, order):
        metrics = client.get(f'{BASE}/service-orders/metrics/').json()
        assert metrics['total_orders'] == 1
        assert metrics['orders_by_status']['RECEIVED'] == 1
