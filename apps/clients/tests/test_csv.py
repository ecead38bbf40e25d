import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status

from apps.clients.models import Client
from apps.clients.services.csv_io import EXPORT_HEADERS, sanitize_cell


class TestSanitizeCell:

    @pytest.mark.parametrize('value', ['=SUM(A1:A2)', '+48123', '-1', '@cmd'])
    def test_formula_prefixed(self, value):
        assert sanitize_cell(value) == "'" + value

    def test_plain_values(self):
        assert sanitize_cell('Firma') == 'Firma'
        assert sanitize_cell(None) == ''


@pytest.mark.django_db
class TestExport:

    def test_export(self, owner_client, company):
        Client.objects.create(company=company, name='=HYPERLINK("x")', nip='1234567890')

        response = owner_client.get(reverse('clients:client-export'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert 'attachment' in response['Content-Disposition']
        lines = response.content.decode('utf-8-sig').splitlines()
        assert lines[0] == ','.join(EXPORT_HEADERS)
        assert lines[1].startswith('"\'=HYPERLINK(""x"")"')

    def test_template(self, owner_client):
        response = owner_client.get(reverse('clients:client-import-template'))

        assert response.status_code == status.HTTP_200_OK
        assert response.content.decode('utf-8-sig').startswith('name,nip,email')


@pytest.mark.django_db
class TestImport:

    def test_import_creates_and_updates(self, owner_client, company, client_obj):
        content = (
            'name;nip;email;vatStatus\n'
            'Kowalski Nowa Nazwa;1234567890;;VAT_MONTHLY\n'
            'Nowa Firma;111-222-33-44;nowa@firma.pl;\n'
        )
        response = owner_client.post(reverse('clients:client-import'), {'content': content})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'imported': 1, 'updated': 1, 'errors': []}
        client_obj.refresh_from_db()
        assert client_obj.name == 'Kowalski Nowa Nazwa'
        assert Client.objects.get(company=company, nip='1112223344').name == 'Nowa Firma'

    def test_blank_cells_keep_existing_values(self, owner_client, client_obj):
        content = 'name;nip;email;vatStatus\nKowalski Nowa Nazwa;1234567890;;VAT_MONTHLY\n'
        response = owner_client.post(reverse('clients:client-import'), {'content': content})

        assert response.data['updated'] == 1
        client_obj.refresh_from_db()
        assert client_obj.email == 'biuro@kowalski.pl'
        assert client_obj.vat_status == 'VAT_MONTHLY'

    def test_import_file_with_bom(self, owner_client, company):
        upload = SimpleUploadedFile(
            'klienci.csv',
            '\ufeffname,nip\nPlik Sp. z o.o.,\n'.encode('utf-8'),
            content_type='text/csv',
        )
        response = owner_client.post(reverse('clients:client-import'), {'file': upload}, format='multipart')

        assert response.data['imported'] == 1
        assert Client.objects.filter(company=company, name='Plik Sp. z o.o.').exists()

    def test_invalid_rows_write_nothing(self, owner_client, company):
        content = 'name,nip,email\nDobra Firma,,\nX,12,zly-email\n'
        response = owner_client.post(reverse('clients:client-import'), {'content': content})

        assert response.data['imported'] == 0
        fields = {(e['row'], e['field']) for e in response.data['errors']}
        assert fields == {(3, 'name'), (3, 'nip'), (3, 'email')}
        assert not Client.objects.filter(company=company).exists()

    def test_too_long_phone_rejected(self, owner_client, company):
        content = f'name,phone\nDługi Telefon,{"1" * 40}\n'
        response = owner_client.post(reverse('clients:client-import'), {'content': content})

        assert response.data['imported'] == 0
        assert [(e['row'], e['field']) for e in response.data['errors']] == [(2, 'phone')]
        assert not Client.objects.filter(company=company).exists()

    def test_missing_name_header(self, owner_client):
        response = owner_client.post(reverse('clients:client-import'), {'content': 'nip,email\n1234567890,a@b.pl\n'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Brak wymaganego nagłówka: name'

    def test_header_only(self, owner_client):
        response = owner_client.post(reverse('clients:client-import'), {'content': 'name,nip\n'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
