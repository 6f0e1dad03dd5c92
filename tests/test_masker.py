"""Tests for numeric masking and pattern keys."""
import pytest

from transcache.services.masker import MaskResult, build_pattern_key, mask, unmask


class TestMask:

    def test_bare_number(self):
        result = mask('Livraison en 3 jours ouvrés')
        assert result.masked_text == 'Livraison en __TOK0__ jours ouvrés'
        assert result.tokens == (('__TOK0__', '3'),)

    def test_currency_amount_is_one_token(self):
        result = mask('Prix: 12,50 €')
        assert result.masked_text == 'Prix: __TOK0__'
        assert result.tokens == (('__TOK0__', '12,50 €'),)

    def test_currency_prefix_and_code(self):
        result = mask('Only $40 or 35 EUR')
        assert result.masked_text == 'Only __TOK0__ or __TOK1__'
        assert [original for _, original in result.tokens] == ['$40', '35 EUR']

    def test_units_and_percent(self):
        result = mask('Sac de 2 kg, -15% aujourd\'hui')
        assert result.masked_text == "Sac de __TOK0__, __TOK1__ aujourd'hui"
        assert [original for _, original in result.tokens] == ['2 kg', '-15%']

    def test_unit_letter_must_end_the_word(self):
        # "3 mois" is not "3 m"
        result = mask('Garantie 3 mois')
        assert result.masked_text == 'Garantie __TOK0__ mois'
        assert result.tokens == (('__TOK0__', '3'),)

    def test_tokens_are_numbered_left_to_right(self):
        result = mask('Commande 1234 : 12 €')
        assert result.masked_text == 'Commande __TOK0__ : __TOK1__'
        assert result.tokens == (('__TOK0__', '1234'), ('__TOK1__', '12 €'))

    def test_numbering_ignores_which_pass_found_the_run(self):
        unit_first = mask('Prix 12 € pour 3 articles')
        bare_first = mask('Prix 12 pour 3 € articles')
        assert unit_first.masked_text == 'Prix __TOK0__ pour __TOK1__ articles'
        assert bare_first.masked_text == 'Prix __TOK0__ pour __TOK1__ articles'
        assert [original for _, original in bare_first.tokens] == ['12', '3 €']

    def test_separators_inside_a_run(self):
        result = mask('Appelez le 01 23 45 67 89 ou 1.000,00')
        assert result.masked_text == 'Appelez le __TOK0__ ou __TOK1__'
        assert [original for _, original in result.tokens] == ['01 23 45 67 89', '1.000,00']

    def test_text_without_digits_is_unchanged(self):
        result = mask('Bonjour tout le monde')
        assert result == MaskResult('Bonjour tout le monde', ())
        assert not result.has_tokens

    def test_many_tokens_do_not_collide(self):
        text = ' '.join(f'{i} x' for i in range(12))
        result = mask(text)
        assert len(result.tokens) == 12
        assert unmask(result.masked_text, result.tokens) == text

    def test_result_is_immutable(self):
        result = mask('3 jours')
        with pytest.raises(AttributeError):
            result.masked_text = 'other'
        assert isinstance(result.tokens, tuple)

    def test_non_string(self):
        assert mask(None) == MaskResult('', ())


class TestUnmask:

    @pytest.mark.parametrize('text', [
        'Livraison en 3 jours ouvrés',
        'Prix: 12,50 € au lieu de 15 €',
        'Sac de 2 kg, -15% aujourd\'hui',
        'Commande 1234 : 12 €',
        'Du 12-14 mai, 3 x 20 cm',
        'Pas de chiffres ici',
    ])
    def test_round_trip(self, text):
        result = mask(text)
        assert unmask(result.masked_text, result.tokens) == text

    def test_uses_the_given_tokens(self):
        tokens = mask('Price: 99 €').tokens
        assert unmask('Prijs: __TOK0__', tokens) == 'Prijs: 99 €'

    def test_replaces_first_occurrence_in_token_order(self):
        tokens = (('__TOK0__', '1'), ('__TOK1__', '2'))
        assert unmask('__TOK1__ then __TOK0__', tokens) == '2 then 1'

    def test_missing_placeholder_is_ignored(self):
        assert unmask('no placeholder', (('__TOK0__', '5'),)) == 'no placeholder'


class TestBuildPatternKey:

    def test_numeric_variants_share_a_key(self):
        assert build_pattern_key('Prix: 12€') == build_pattern_key('Prix: 99€')
        assert build_pattern_key('Prix: 12€') == 'prix: __NUM__'

    def test_delivery_sentence(self):
        assert build_pattern_key('Livraison en 3 jours ouvrés') == 'livraison en __NUM__ jours ouvres'

    def test_different_words_differ(self):
        assert build_pattern_key('Livraison en 3 jours') != build_pattern_key('Retour en 3 jours')

    def test_text_without_digits(self):
        assert build_pattern_key('  Bonjour   le\nmonde ') == 'bonjour le monde'

    def test_every_run_uses_the_same_marker(self):
        assert build_pattern_key('De 10 € à 20 kg en 3 jours') == 'de __NUM__ a __NUM__ en __NUM__ jours'

    def test_shared_key_keeps_token_positions(self):
        key = build_pattern_key('Prix 12 € pour 3 articles')
        assert key == build_pattern_key('Prix 12 pour 3 € articles') == 'prix __NUM__ pour __NUM__ articles'

    @pytest.mark.parametrize('text', [
        'Surface 20 m²',
        'Surface 30 m2',
        'Dosage ½ tasse, 2 cuillères',
        'Commande 1234 : 12 €',
        'Du 12-14 mai, 3 x 20 cm',
    ])
    def test_one_marker_per_token(self, text):
        assert build_pattern_key(text).count('__NUM__') == len(mask(text).tokens)

    def test_compatibility_digits_are_not_numeric_runs(self):
        assert build_pattern_key('Surface 20 m²') == 'surface __NUM__ m2'
        assert build_pattern_key('Surface 20 m²') != build_pattern_key('Surface 30 m2')
