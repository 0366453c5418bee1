from unittest.mock import patch

import pytz

from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from crud import assets
from crud.context_processors import menu_tree
from demo.controllers import ArticleCrud
from demo.store import ARTICLES, TAGS

# 2023-11-14 22:14:00 UTC
EPOCH = 1700000040


def load_articles():
    ARTICLES.reset()
    ARTICLES.put({'title': 'First', 'status': 1, 'published': EPOCH, 'body': 'one'})
    ARTICLES.put({'title': 'Second', 'status': 2, 'published': 0, 'body': 'two'})
    ARTICLES.put({'title': 'Third', 'status': 7, 'published': 0, 'body': 'three'})


@override_settings(TZ=pytz.utc)
class ListScreenTest(SimpleTestCase):

    def setUp(self):
        load_articles()
        TAGS.reset()

    def test_00_list(self):
        url = reverse('crud-article')
        response = self.client.get(url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            list(response.context['columns'].keys()),
            ['cb', 'title', 'status', 'published']
        )
        rows = response.context['rows']
        self.assertEqual(len(rows), 3)
        self.assertIn('value="1"', rows[0][0])
        self.assertIn('First', rows[0][1])
        self.assertEqual(rows[0][2], 'Active')
        self.assertEqual(rows[0][3], '2023-11-14 22:14')
        self.assertEqual(rows[1][2], 'Inactive')
        self.assertEqual(rows[1][3], '')
        # status 7 has no option
        self.assertEqual(rows[2][2], '')
        self.assertContains(response, 'Articles shown on the front page.')
        self.assertContains(response, reverse('crud-article-form'))

    def test_01_row_actions(self):
        response = self.client.get(reverse('crud-article'))
        first = response.context['rows'][0][1]
        self.assertIn('%s?id=1' % reverse('crud-article-form'), first)
        self.assertIn('action=delete&amp;id=1', first)
        self.assertIn('Are you sure? This operation cannot be undone!', first)

    def test_02_single_delete(self):
        url = reverse('crud-article')
        response = self.client.get(url, {'action': 'delete', 'id': '2'})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Item deleted.')
        self.assertIsNone(ARTICLES.get(2))
        self.assertEqual(len(response.context['rows']), 2)

    def test_03_single_delete_missing(self):
        url = reverse('crud-article')
        response = self.client.get(url, {'action': 'delete', 'id': '99'})
        self.assertEqual(response.status_code, 200)
        self.assertNotContains(response, 'Item deleted.')
        self.assertEqual(len(ARTICLES.all()), 3)

    def test_04_bulk_delete(self):
        url = reverse('crud-article')
        response = self.client.post(
            url, {'bulk_action': 'delete', '_bulkid': ['1', '3', '99', 'abc']}
        )
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '2 item(s) deleted.')
        self.assertEqual([a['id'] for a in ARTICLES.all()], [2])

    def test_05_bulk_delete_no_action(self):
        url = reverse('crud-article')
        response = self.client.post(url, {'bulk_action': '', '_bulkid': ['1']})
        self.assertNotContains(response, 'deleted.')
        self.assertEqual(len(ARTICLES.all()), 3)

    def test_06_dict_items(self):
        TAGS.put({'name': 'news', 'color': 'red'})
        response = self.client.get(reverse('crud-tag'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(list(response.context['columns'].keys()), ['cb', 'name', 'color'])
        self.assertEqual(response.context['rows'][0][2], 'Red')

    def test_07_menu(self):
        response = self.client.get(reverse('crud-article'))
        self.assertContains(response, 'Manage Tag')
        tree = menu_tree()
        article = [e for e in tree if e['slug'] == 'article'][0]
        self.assertEqual(article['title'], 'Article')
        self.assertEqual(article['url'], reverse('crud-article'))
        self.assertEqual([c['slug'] for c in article['children']], ['tag'])
        self.assertEqual(article['children'][0]['url'], reverse('crud-tag'))


@override_settings(TZ=pytz.utc)
class EditScreenTest(SimpleTestCase):

    def setUp(self):
        load_articles()

    def test_00_new(self):
        response = self.client.get(reverse('crud-article-form'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [f['field'] for f in response.context['fields']],
            ['title', 'status', 'published', 'body']
        )
        self.assertContains(response, 'name="published"')
        self.assertContains(response, 'crud.datetime.js')
        self.assertContains(response, 'Leave empty to keep unpublished.')

    def test_01_existing(self):
        url = reverse('crud-article-form')
        response = self.client.get(url, {'id': '1'})
        self.assertEqual(response.status_code, 200)
        values = {f['field']: f['value'] for f in response.context['fields']}
        self.assertEqual(values['title'], 'First')
        self.assertEqual(values['published'], '2023-11-14 22:14')
        self.assertContains(response, 'value="2023-11-14 22:14"')

    def test_02_missing_is_new(self):
        url = reverse('crud-article-form')
        response = self.client.get(url, {'id': 'abc'})
        self.assertEqual(response.status_code, 200)
        values = {f['field']: f['value'] for f in response.context['fields']}
        self.assertEqual(values['title'], '')

    def test_03_create(self):
        url = reverse('crud-article-form')
        response = self.client.post(url, {
            'id': '',
            'title': 'Fourth',
            'status': '2',
            'published': '2023-11-14 22:14',
            'body': 'four',
        })
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], '%s?id=4' % url)
        saved = ARTICLES.get(4)
        self.assertEqual(saved['title'], 'Fourth')
        self.assertEqual(saved['status'], '2')
        self.assertEqual(saved['published'], EPOCH)
        response = self.client.get(response['Location'])
        self.assertContains(response, 'Article saved.')

    def test_04_update(self):
        url = reverse('crud-article-form')
        response = self.client.post(url, {
            'id': '2',
            'title': 'Second edited',
            'status': '1',
            'published': '',
            'body': 'two',
        }, follow=True)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Article saved.')
        self.assertEqual(ARTICLES.get(2)['title'], 'Second edited')
        self.assertEqual(ARTICLES.get(2)['published'], 0)
        self.assertEqual(len(ARTICLES.all()), 3)

    def test_05_validation_failure(self):
        url = reverse('crud-article-form')
        response = self.client.post(url, {
            'id': '1',
            'title': '  ',
            'status': '2',
            'published': '',
            'body': 'changed',
        })
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Title is required.')
        self.assertEqual(ARTICLES.get(1)['body'], 'one')
        # submitted values are redisplayed
        self.assertContains(response, 'value="changed"')

    def test_06_validation_message_exact(self):
        url = reverse('crud-article-form')
        with patch.object(ArticleCrud, 'validate_item', return_value='name required'), \
             patch.object(ArticleCrud, 'save_item') as save_item:
            response = self.client.post(url, {
                'id': '', 'title': 'x', 'status': '1', 'published': '', 'body': '',
            })
        save_item.assert_not_called()
        self.assertEqual(response.status_code, 200)
        messages = [str(m) for m in response.context['messages']]
        self.assertEqual(messages, ['name required'])

    def test_07_bad_timestamp(self):
        url = reverse('crud-article-form')
        response = self.client.post(url, {
            'id': '1',
            'title': 'First',
            'status': '1',
            'published': 'whenever',
            'body': 'one',
        })
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'is not a valid date/time.')
        self.assertEqual(ARTICLES.get(1)['published'], EPOCH)

    def test_08_post_missing_id_creates(self):
        url = reverse('crud-article-form')
        response = self.client.post(url, {
            'id': '99', 'title': 'New', 'status': '1', 'published': '', 'body': '',
        })
        self.assertEqual(response.status_code, 302)
        self.assertIsNone(ARTICLES.get(99))
        self.assertEqual(ARTICLES.get(4)['title'], 'New')


class ResourceTest(SimpleTestCase):

    def test_script(self):
        response = self.client.get(reverse('crud-res'), {'res': 'crud.datetime.js'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/javascript')
        self.assertIn(b'datetime-local', b''.join(response.streaming_content))

    def test_style(self):
        response = self.client.get(reverse('crud-res'), {'res': 'crud.datetime.css'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/css')
        response.close()

    def test_unknown(self):
        response = self.client.get(reverse('crud-res'), {'res': '../settings.py'})
        self.assertEqual(response.status_code, 404)

    def test_registered_at_startup(self):
        self.assertEqual(
            assets.REGISTERED['crud-datetime'],
            {'script': 'crud.datetime.js', 'style': 'crud.datetime.css'}
        )
