"""
Locators for the Lightning Service Console.

Selectors starting with // are XPath; Playwright detects them automatically.
"""

LOGIN_ACCESSORS = {
    "username": "#username",
    "password": "#password",
    "form": "#login_form",
    "formSubmitBtn": "#Login",
    "appLauncher": ".appLauncher button, one-app-launcher-header",
    "appSearchInput": (
        'input[placeholder="Search apps and items..."], '
        'input[placeholder="Search apps or items..."], '
        'input[placeholder="Search apps..."]'
    ),
    "appTile": (
        'a[class="appTileTitle"] mark, [class="appTileTitleNoDesc"] mark, '
        "one-app-launcher-menu-item lightning-formatted-rich-text span p"
    ),
    "recordingModal": "lightning-modal",
    "iAgreeButton": 'lightning-button[data-id="agree-button"] button',
}

GATEWAY_ACCESSORS = {
    "advancedButton": "#details-button",
    "proceedLink": "#proceed-link",
}

ACCESSORS = {
    # Omni-Channel
    "omniChannel": '//div[contains(@class, "oneUtilityBarItem")]/button/span[text()="Omni-Channel"]',
    "omniChannelOnline": '//div[contains(@class, "oneUtilityBarItem")]/button/span[text()="Omni-Channel (Online)"]',
    "statusDropDown": ".oneUtilityBarPanel .slds-dropdown-trigger button",
    "availableForVoice": '//div[contains(@class, "slds-dropdown__item")]//span[text()="Available"]',
    "offlineStatus": '//div[contains(@class, "slds-dropdown__item")]//span[text()="Offline"]',

    # Incoming call
    "inbox": '//span[contains(text(), "Inbox (1)")]',
    "acceptIncomingMessage": "//button[contains(@title,'Accept')]",
    "muteButton": "//button[contains(@title,'Mute')]",

    # Outbound call
    "telephonyTab": '//div[@class="uiTabBar"]//a[@data-tab-name="embeddedTelephonyTab"]//span[@class="title"]',
    "phoneInput": 'lightning-input.fill-width input[type="tel"]',
    "callButton": 'native_voice-call-controls-container div.slds-p-horizontal_large button[title="Call"]',

    # Transcript
    "customerFirstMessage": (
        '//*[contains(@class, "slds-is-relative") and contains(@class, "slds-chat-message__text") '
        'and contains(@class, "slds-chat-message__text_inbound")]'
    ),
    "agentFirstMessage": (
        '//*[contains(@class, "slds-is-relative") and contains(@class, "slds-chat-message__text") '
        'and contains(@class, "slds-chat-message__text_outbound")]'
    ),

    # Ending call
    "closeVC": "//button[contains(@title,'Close VC-')]",
    "endCallButton": "//button[contains(@title,'End')]",
    "endCallConfirmButton": (
        '//button[contains(@class, "slds-button_brand") and contains(@class, "saveBtn") '
        'and text()="End Call"]'
    ),

    # Voice session id
    "voiceSessionId": (
        '//div[@data-target-selection-name="sfdc:RecordField.VoiceCall.VendorCallKey"]'
        '//span[@class="uiOutputText"]'
    ),

    "backdrop": '.slds-backdrop_open, .backdrop.slds-backdrop, div[class*="backdrop"]',
}


def app_selector(app: str) -> str:
    return f".appName [title='{app}']"
