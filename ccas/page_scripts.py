"""
JavaScript snippets evaluated inside the console page.
"""

SET_LOCATION = "url => { window.location.href = url; }"

# Lightning shell finished loading
APP_READY = """
() => document.readyState === 'complete' &&
      document.querySelector('one-app-launcher-header') !== null
"""

RECORDING_MODAL_GONE = "() => document.querySelector('lightning-modal') === null"

CLICK_PROCEED_BY_TEXT = """
() => {
    const links = Array.from(document.querySelectorAll('a'));
    const proceed = links.find(link => link.textContent && link.textContent.includes('Proceed to gateway'));
    if (proceed) {
        proceed.click();
        return true;
    }
    return false;
}
"""

# Keeps the stream on window so the fake capture device stays open
HOLD_MICROPHONE = """
async () => {
    try {
        const stream = await navigator.mediaDevices.getUserMedia({ audio: true, video: false });
        window.__testAudioStream = stream;
        return true;
    } catch (error) {
        return String(error);
    }
}
"""

REQUEST_MICROPHONE = """
async () => {
    try {
        await navigator.mediaDevices.getUserMedia({ audio: true, video: false });
        return true;
    } catch (error) {
        return String(error);
    }
}
"""

WEBRTC_MONITOR = """
() => {
    if (!window.RTCPeerConnection || window.__ccasOfferMonitor) {
        return false;
    }
    const proto = RTCPeerConnection.prototype;
    const originalCreateOffer = proto.createOffer;
    let callCount = 0;
    proto.createOffer = function(...args) {
        callCount++;
        console.log(`[RTCPeerConnection] createOffer called (count: ${callCount})`);
        return originalCreateOffer.apply(this, args);
    };
    window.__ccasOfferMonitor = true;
    return true;
}
"""

BACKDROP_INFO = """
selector => Array.from(document.querySelectorAll(selector)).map(bd => ({
    className: bd.className,
    visible: bd.offsetParent !== null,
    zIndex: window.getComputedStyle(bd).zIndex,
    display: window.getComputedStyle(bd).display
}))
"""
