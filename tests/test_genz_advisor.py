from unittest import mock

import requests

from services.advice_providers import (
    CohereProvider,
    HuggingFaceProvider,
    OpenAIProvider,
    ProviderChain,
    build_default_providers,
)
from services.advice_selector import AdviceContext
from services.genz_advisor import (
    GENZ_REPLIES,
    GenZAdvisor,
    fallback_branch,
    genz_branch,
    is_wellness_related,
)


def _response(status=200, payload=None, text=''):
    response = mock.Mock()
    response.status_code = status
    response.json.return_value = payload
    response.text = text
    return response


def _session(response=None, error=None):
    session = mock.Mock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return session


class StubProvider:
    def __init__(self, name, reply=None, error=None):
        self.name = name
        self.reply = reply
        self.error = error
        self.calls = []

    def generate(self, query):
        self.calls.append(query)
        if self.error:
            raise self.error
        return self.reply


class TestProviders:
    def test_openai_reply_is_extracted(self):
        session = _session(_response(payload={'choices': [{'message': {'content': '  no cap  '}}]}))
        provider = OpenAIProvider('key', session=session)
        assert provider.generate('hi') == 'no cap'
        _, kwargs = session.post.call_args
        assert kwargs['headers']['Authorization'] == 'Bearer key'
        assert kwargs['json']['messages'][-1] == {'role': 'user', 'content': 'hi'}
        assert kwargs['timeout'] == 10

    def test_missing_key_skips_the_call(self):
        session = _session(_response(payload={}))
        assert OpenAIProvider(None, session=session).generate('hi') is None
        session.post.assert_not_called()

    def test_http_errors_return_none(self):
        session = _session(_response(status=429, text='rate limited'))
        assert CohereProvider('key', session=session).generate('hi') is None

    def test_network_errors_return_none(self):
        session = _session(error=requests.ConnectionError('down'))
        assert CohereProvider('key', session=session).generate('hi') is None

    def test_malformed_payload_returns_none(self):
        session = _session(_response(payload={'generations': []}))
        assert CohereProvider('key', session=session).generate('hi') is None

    def test_huggingface_needs_no_key_and_strips_the_prompt(self):
        payload = [{'generated_text': 'Question: hi\n\nResponse: hey bestie'}]
        session = _session(_response(payload=payload))
        provider = HuggingFaceProvider(session=session)
        assert provider.generate('hi') == 'hey bestie'
        args, kwargs = session.post.call_args
        assert args[0].endswith('/models/gpt2')
        assert 'Authorization' not in kwargs['headers']

    def test_huggingface_is_available_without_a_token(self):
        config = {'HUGGINGFACE_ENABLED': True}
        providers = build_default_providers(config)
        assert [p.name for p in providers] == ['openai', 'cohere', 'huggingface']
        assert [p.available for p in providers] == [False, False, True]

    def test_default_providers_follow_config(self):
        config = {'OPENAI_API_KEY': 'a', 'COHERE_API_KEY': None, 'HUGGINGFACE_ENABLED': False,
                  'ADVICE_PROVIDER_TIMEOUT': 3}
        providers = build_default_providers(config)
        assert [p.name for p in providers] == ['openai', 'cohere']
        assert providers[0].available and not providers[1].available
        assert providers[0].timeout == 3


class TestProviderChain:
    def test_first_reply_wins(self):
        first = StubProvider('openai')
        second = StubProvider('cohere', reply='hello from cohere')
        third = StubProvider('huggingface', reply='unused')
        chain = ProviderChain([first, second, third], fallback=lambda q: 'fallback')
        assert chain.generate('hi') == ('hello from cohere', 'cohere')
        assert third.calls == []

    def test_raising_provider_is_skipped(self):
        broken = StubProvider('openai', error=RuntimeError('boom'))
        working = StubProvider('cohere', reply='ok')
        chain = ProviderChain([broken, working], fallback=lambda q: 'fallback')
        assert chain.generate('hi') == ('ok', 'cohere')

    def test_fallback_when_nobody_answers(self):
        chain = ProviderChain([StubProvider('openai')], fallback=lambda q: f'canned {q}')
        assert chain.generate('hi') == ('canned hi', 'fallback')


class TestBranches:
    def test_wellness_detection(self):
        assert is_wellness_related('I am so tired lately')
        assert not is_wellness_related('who won the game last night')

    def test_fallback_branches(self):
        assert fallback_branch('who are you?') == 'fallback.identity'
        assert fallback_branch('what can you do') == 'fallback.capabilities'
        assert fallback_branch('how does this app work') == 'fallback.app'
        assert fallback_branch('capital of France?') == 'fallback.general'

    def test_greeting_comes_first(self):
        assert genz_branch('hey, stressed out', AdviceContext(avg_stress=9)) == 'greeting'

    def test_thresholds(self):
        assert genz_branch('so much stress', AdviceContext(avg_stress=8)) == 'stress.stress_high'
        assert genz_branch('so much stress', AdviceContext(avg_stress=7)) == 'stress.generic'
        assert genz_branch('I need more sleep', AdviceContext(avg_sleep=5)) == 'sleep.sleep_low'
        assert genz_branch('I need more sleep', AdviceContext(avg_sleep=8)) == 'sleep.generic'
        assert genz_branch('help me stop doom scrolling', AdviceContext()) == 'doom_scrolling'


class TestAdvisor:
    def test_empty_message(self):
        reply = GenZAdvisor().advise('  ')
        assert reply.branch == 'empty'
        assert reply.text == GENZ_REPLIES['empty']

    def test_wellness_question_never_calls_providers(self):
        provider = StubProvider('openai', reply='should not be used')
        checkins = {'morning': {'mood': 6, 'stress': 9, 'sleep': 7, 'submitted': True}}
        reply = GenZAdvisor([provider]).advise("I'm so stressed", checkins)
        assert reply.branch == 'stress.stress_high'
        assert reply.is_serious
        assert reply.source == 'canned'
        assert provider.calls == []

    def test_default_reply_uses_check_in_figures(self):
        checkins = {'morning': {'mood': 6, 'stress': 9, 'sleep': 7, 'submitted': True}}
        reply = GenZAdvisor().advise('how is my wellness looking', checkins)
        assert reply.branch == 'default.stress_high'
        assert '9.0/10' in reply.text

    def test_default_reply_without_check_ins(self):
        reply = GenZAdvisor().advise('how is my wellness looking')
        assert reply.branch == 'default.no_data'
        assert not reply.is_serious

    def test_general_question_goes_to_providers(self):
        provider = StubProvider('openai', reply='Paris, bestie')
        reply = GenZAdvisor([provider]).advise('capital of France?')
        assert reply.to_dict() == {'text': 'Paris, bestie', 'isSerious': False,
                                   'branch': 'general', 'source': 'openai'}

    def test_general_question_falls_back_to_canned_reply(self):
        reply = GenZAdvisor([StubProvider('openai')]).advise('who are you?')
        assert reply.branch == 'fallback.identity'
        assert reply.source == 'fallback'
        assert reply.text == GENZ_REPLIES['fallback.identity']
